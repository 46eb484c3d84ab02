"""Code-tagged error chain.

A ChainError node carries:
- message: Human-readable description (lower-cased)
- code: Machine-readable classification tag (lower-cased)
- cause: The next node of the chain, or None for the tail

Chains are immutable. wrap() always returns a new chain with one more node
appended at the tail; the receiver is left untouched.
"""

from typing import Any, Iterator, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class Matcher(Protocol):
    """Capability used by the chain walk to let an error define its own equality."""

    def matches(self, target: BaseException) -> bool:
        """Return True if this error should be treated as ``target``."""
        ...


class ChainError(Exception):
    """Classified error with an optional wrapped cause.

    Example:
        not_found = new("Document not found", "document_not_found")
        err = new("Could not render page", "render_failed").wrap(not_found)

        str(err)                 # "could not render page"
        err.code                 # "render_failed"
        is_error(err, not_found)  # True
    """

    def __init__(self, message: str, code: str, cause: Optional["ChainError"] = None):
        """Initialize a node.

        Args:
            message: Human-readable message, stored lower-cased
            code: Machine-readable code, stored lower-cased
            cause: Existing node linked as-is under this one. Unlike wrap(),
                its code is kept, so every node of the chain may carry its
                own classification.

        Raises:
            TypeError: If cause is not a ChainError
        """
        if cause is not None and not isinstance(cause, ChainError):
            raise TypeError(f"cause must be a ChainError, got {type(cause).__name__}")
        self._message = message.lower()
        self._code = code.lower()
        self._cause = cause
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def code(self) -> str:
        return self._code

    @property
    def cause(self) -> Optional["ChainError"]:
        return self._cause

    def __str__(self) -> str:
        return self._message

    def __repr__(self) -> str:
        parts = [f"{type(n).__name__}({n._message!r}, {n._code!r}" for n in self.chain()]
        return ", cause=".join(parts) + ")" * len(parts)

    def _fields(self) -> Iterator[Tuple[type, str, str]]:
        for node in self.chain():
            yield type(node), node._message, node._code

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChainError) or type(other) is not type(self):
            return NotImplemented
        a: Optional[ChainError] = self
        b: Optional[ChainError] = other
        while a is not None and b is not None:
            if a is b:
                return True
            if type(a) is not type(b) or a._message != b._message or a._code != b._code:
                return False
            a, b = a._cause, b._cause
        return a is None and b is None

    def __hash__(self) -> int:
        return hash(tuple(self._fields()))

    def __reduce__(self) -> Any:
        return (_restore, (tuple(self._fields()),))

    def _with_cause(self, cause: Optional["ChainError"]) -> "ChainError":
        """Copy this node, replacing only its cause."""
        node = type(self).__new__(type(self))
        ChainError.__init__(node, self._message, self._code, cause)
        return node

    def wrap(self, cause: Optional[BaseException]) -> "ChainError":
        """Append ``cause`` at the tail of the chain.

        The new tail is built from the text of ``cause`` and the code of the
        node it is attached to, i.e. the former tail. Every existing node keeps
        its own code.

        Args:
            cause: Error to append. None leaves the chain unchanged.

        Returns:
            A new chain. The receiver is never modified.
        """
        if cause is None:
            return self
        nodes = list(self.chain())
        rebuilt = new(str(cause), nodes[-1]._code)
        # Copy from the former tail back up to the head
        for node in reversed(nodes):
            rebuilt = node._with_cause(rebuilt)
        return rebuilt

    def unwrap(self) -> Optional["ChainError"]:
        """Return the direct cause, or None for the tail."""
        return self._cause

    def matches(self, target: BaseException) -> bool:
        """Node-local equality: true when the messages are equal.

        Codes are ignored, so two independently built errors with the same
        text but different codes match each other.
        """
        return self._message == str(target)

    def chain(self) -> Iterator["ChainError"]:
        """Iterate from this node down to the tail."""
        node: Optional[ChainError] = self
        while node is not None:
            yield node
            node = node._cause

    def to_dict(self) -> dict:
        """Head node as a response body (the cause chain is not included)."""
        return {"description": self._message, "code": self._code}


def _restore(fields: Tuple[Tuple[type, str, str], ...]) -> ChainError:
    chain: Optional[ChainError] = None
    for cls, message, code in reversed(fields):
        node = cls.__new__(cls)
        ChainError.__init__(node, message, code, chain)
        chain = node
    assert chain is not None
    return chain


def new(message: str, code: str) -> ChainError:
    """Create a terminal error node."""
    return ChainError(message, code)


def new_with_cause(
    message: str, code: str, cause: Optional[BaseException]
) -> ChainError:
    """Shortcut for ``new(message, code).wrap(cause)``."""
    return new(message, code).wrap(cause)


def unwrap(err: Optional[BaseException]) -> Optional[BaseException]:
    """Return the next error in the chain.

    ChainError nodes expose their cause; other exceptions follow explicit
    chaining (``raise ... from ...``).
    """
    if err is None:
        return None
    if isinstance(err, ChainError):
        return err.unwrap()
    return err.__cause__


def _same(err: BaseException, target: BaseException) -> bool:
    # Comparison errors on exotic types count as "not equal".
    try:
        return bool(err == target)
    except Exception:
        return False


def is_error(err: Optional[BaseException], target: Optional[BaseException]) -> bool:
    """Tell whether ``err`` or anything it wraps matches ``target``.

    At each hop the node matches when it is equal to ``target`` or when its
    ``matches`` method accepts it.
    """
    if err is None or target is None:
        return err is target
    node: Optional[BaseException] = err
    while node is not None:
        if _same(node, target):
            return True
        if isinstance(node, Matcher) and node.matches(target):
            return True
        node = unwrap(node)
    return False


def one_of(err: Optional[BaseException], *targets: BaseException) -> bool:
    """Tell whether any target is found anywhere in the chain of ``err``."""
    if not targets:
        return False
    return any(is_error(err, target) for target in targets)


def is_only(err: Optional[BaseException], target: Optional[BaseException]) -> bool:
    """Tell whether ``err`` is exactly ``target`` with nothing wrapped under it.

    A chain with more than one node never passes, even against its own head.
    """
    if target is None:
        return err is target
    if err is None or not _same(err, target):
        return False
    if isinstance(err, Matcher) and not err.matches(target):
        return False
    if unwrap(err) is not None:
        return False
    return True


# Fallback used when no more specific error applies
UNKNOWN = new("unknown error", "errors_unknown")
