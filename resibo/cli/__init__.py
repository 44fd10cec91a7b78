"""Unified command-line interface for resibo.

Usage:
    resibo extract [ocr.txt] [--json]
    resibo scan <image> [image ...] [--ocr-url URL] [--save] [--json]
    resibo serve [--host] [--port]
"""
