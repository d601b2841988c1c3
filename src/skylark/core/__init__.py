"""Dispatch core — callbacks, filters, registries, and the dispatcher.

The pieces here are framework-agnostic: they know nothing about HTTP.
``skylark.app.App`` wires them together with the lifecycle operations.
"""
