"""Snapshot compiler: raw per-entity JSON documents in, compiled dex tables out.

This package is Django-free. The `build_dex` management command is a thin
wrapper around `compiler.pipeline` and `compiler.emit`.
"""
