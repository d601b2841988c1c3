"""Templating — the kida-backed view collaborator."""
