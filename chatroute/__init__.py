"""Chatroute - routes prefixed chat messages to a tree of command handlers.

Commands are registered on a `Router` with space separated paths ("ping",
"ping sound"), then a channel (console, Discord, in-memory) feeds messages
to `Router.dispatch`, which resolves the deepest matching command, serves
help and contains handler failures.
"""
