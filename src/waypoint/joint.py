"""Tree wiring for controllers.

A Joint has at most one parent (uplink) and an ordered list of children
(downlinks). Order matters: delegation scans children in the order they
were linked and stops at the first that accepts a state.
"""


class Joint:
    """A node in the controller tree.

    Usage::

        root = Joint()
        child = Joint(name="sidebar")
        root.link(child)
        root.children   # (child,)
        child.parent    # root
    """

    def __init__(self, name: str | None = None) -> None:
        self.name = name or type(self).__name__
        self._parent: Joint | None = None
        self._children: list[Joint] = []
        self._destroyed = False

    @property
    def parent(self) -> "Joint | None":
        return self._parent

    @property
    def children(self) -> tuple["Joint", ...]:
        return tuple(self._children)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def link(self, child: "Joint") -> "Joint":
        """Append *child* to this node's children and return it.

        A child already linked elsewhere is moved here. Raises
        ``ValueError`` if the link would create a cycle.
        """
        node: Joint | None = self
        while node is not None:
            if node is child:
                msg = f'Cannot link "{child.name}" under itself or its own descendant "{self.name}".'
                raise ValueError(msg)
            node = node._parent

        if child._parent is not None:
            child._parent.unlink(child)
        child._parent = self
        self._children.append(child)
        return child

    def unlink(self, child: "Joint") -> None:
        if child in self._children:
            self._children.remove(child)
            child._parent = None

    def destroy(self) -> None:
        """Destroy children depth-first, then detach from the parent."""
        if self._destroyed:
            return
        self._destroyed = True
        for child in list(self._children):
            child.destroy()
        if self._parent is not None:
            self._parent.unlink(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} children={len(self._children)}>"
