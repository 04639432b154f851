"""Hierarchical command tree: registration and path resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..logging_setup import get_logger
from ..models import StructuralError
from ..parsing import split_path
from .models import CommandDescriptor, CommandNode, Handler, Help, Walk

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterator, Sequence

__all__ = ["CommandTree"]


class CommandTree:
    """Owns every registered command node.

    A path "a b c" can only be registered once "a" and "a b" exist, and is
    resolved segment by segment from the root mapping.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.roots: dict[str, CommandNode] = {}
        self.log = logger or get_logger("commands")

    def __iter__(self) -> Iterator[str]:
        return iter(self.roots)

    def __len__(self) -> int:
        return len(self.roots)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        try:
            self.strict_walk(split_path(path))
        except StructuralError:
            return False
        return True

    def names(self) -> list[str]:
        """Return the top-level command names, in registration order."""
        return list(self.roots)

    def strict_walk(self, segments: Sequence[str]) -> CommandNode:
        """Resolve every segment of `segments`.

        Args:
            segments: The command path, split

        Returns:
            The node designated by the full path

        Raises:
            StructuralError: if any segment is missing
        """
        if not segments:
            raise StructuralError(segments)
        children = self.roots
        node: CommandNode | None = None
        for segment in segments:
            node = children.get(segment)
            if node is None:
                raise StructuralError(segments)
            children = node.children
        assert node is not None
        return node

    def permissive_walk(self, segments: Sequence[str]) -> Walk:
        """Follow `segments` as deep as registered commands allow.

        Stops at the first segment without a matching child, so trailing
        tokens after a valid command path are left over as arguments.

        Args:
            segments: The tokens to follow

        Returns:
            The consumed segments and the deepest node reached (None if the
            first segment is unknown)
        """
        through: list[str] = []
        node: CommandNode | None = None
        children = self.roots
        for segment in segments:
            child = children.get(segment)
            if child is None:
                break
            node = child
            through.append(segment)
            children = child.children
        return Walk(through=tuple(through), command=node)

    def register(self, path: str, handler: Handler, help: Help | None = None) -> CommandNode:  # noqa: A002
        """Register `handler` under the space separated `path`.

        Re-registering an existing path replaces the node and drops its
        subcommands.

        Raises:
            StructuralError: if the parent path is not registered
        """
        return self._insert(split_path(path), handler, help, {})

    def add(self, descriptor: CommandDescriptor) -> CommandNode:
        """Register a command together with its help and subcommands."""
        segments = split_path(descriptor.command)
        children = self._build_children(descriptor.children, tuple(segments))
        return self._insert(segments, descriptor.handler, descriptor.help, children)

    def set_help(self, path: str, help: Help) -> CommandNode:  # noqa: A002
        """Attach or replace the help of an existing command.

        Raises:
            StructuralError: if the command does not exist
        """
        node = self.strict_walk(split_path(path))
        node.help = help
        return node

    def _insert(
        self,
        segments: list[str],
        handler: Handler,
        help: Help | None,  # noqa: A002
        children: dict[str, CommandNode],
    ) -> CommandNode:
        """Create the node for `segments` once its parent is found."""
        if not segments:
            raise StructuralError(segments)
        *parents, name = segments
        if parents:
            walk = self.permissive_walk(parents)
            if walk.command is None or len(walk.through) != len(parents):
                raise StructuralError(segments)
            container = walk.command.children
        else:
            container = self.roots

        if name in container:
            self.log.warning("Overwriting command %r", " ".join(segments))
        node = CommandNode(name=name, path=tuple(segments), handler=handler, help=help, children=children)
        container[name] = node
        self.log.debug("Registered command %r", " ".join(segments))
        return node

    def _build_children(self, descriptors: list[CommandDescriptor], parent: tuple[str, ...]) -> dict[str, CommandNode]:
        """Build fresh nodes for nested descriptors, without touching the tree."""
        children: dict[str, CommandNode] = {}
        for descriptor in descriptors:
            segments = split_path(descriptor.command)
            if len(segments) != 1:
                raise StructuralError((*parent, *segments), "subcommand descriptors must name a single segment")
            path = (*parent, segments[0])
            children[segments[0]] = CommandNode(
                name=segments[0],
                path=path,
                handler=descriptor.handler,
                help=descriptor.help,
                children=self._build_children(descriptor.children, path),
            )
        return children
