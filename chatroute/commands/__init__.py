"""Command handling for chatroute.

This package provides:
- models: Data structures (CommandNode, CommandDescriptor, Request, Walk)
- tree: The command tree with registration and strict / permissive walks
"""
