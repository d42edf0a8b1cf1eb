"""Markdown editor with live preview and AI writing tools."""
