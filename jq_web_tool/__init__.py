"""Core logic for the jq Web Tool.

The Gradio UI lives in `app.py`. This package contains:
- the query engine binding (jq via PyPI binding or the jq program)
- JSON input parsing and engine output parsing
- output encoding (pretty/compact JSON, CSV, TSV)
- sample data, query templates and the UI event handlers
"""
