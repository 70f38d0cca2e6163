# src/stackrun/core/task.py

from __future__ import annotations

"""
Task: one queued unit of work (owner + target + arguments).

The target is either a direct callable reference or a name that is looked up
on the owner when the task runs (late binding).
"""

import inspect
import types
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .ports import Scope


@dataclass(slots=True, frozen=True)
class DirectRef:
    fn: Callable[..., Any]


@dataclass(slots=True, frozen=True)
class NamedLookup:
    name: Any


Target = DirectRef | NamedLookup


def _normalize_args(args: Any) -> list[Any]:
    # A single non-list value still counts as an argument list of one.
    if args is None:
        return []
    if isinstance(args, (list, tuple)):
        return list(args)
    return [args]


def _same_callable(a: Callable[..., Any], b: Callable[..., Any]) -> bool:
    if a is b:
        return True
    # Every attribute access creates a new bound method object (list.append included);
    # method equality compares __self__ by identity.
    if _is_bound_method(a) and _is_bound_method(b):
        return a == b
    return False


def _is_bound_method(fn: Callable[..., Any]) -> bool:
    return inspect.ismethod(fn) or isinstance(fn, types.BuiltinMethodType)


class Task:
    """
    A bound method invocation waiting in a Scheduler queue.

    Build tasks with Task.build(), which accepts the same loose call shapes as the
    Scheduler operations: (fn), (fn, args), (owner, fn), (owner, fn, args), where fn
    is a callable or a name to resolve on owner.
    """

    __slots__ = ("owner", "target", "args", "last_result", "once")

    def __init__(
        self,
        owner: Any,
        target: Target | None,
        args: list[Any] | None = None,
        *,
        once: bool = False,
    ) -> None:
        self.owner = owner
        self.target = target
        self.args: list[Any] = list(args or [])
        self.last_result: Any = None
        self.once = once

    @classmethod
    def build(cls, owner: Any = None, fn: Any = None, args: Any = None, *, once: bool = False) -> Task:
        if callable(owner):
            # signature = (fn, args)
            args = fn
            fn = owner
            owner = None

        target: Target | None
        if fn is None:
            target = None
        elif callable(fn):
            target = DirectRef(fn)
        else:
            target = NamedLookup(fn)

        return cls(owner, target, _normalize_args(args), once=once)

    def is_callable(self) -> bool:
        """
        True if the task may be callable when it runs.

        A named target is only checked for presence here ("" is a legal name);
        whether the owner actually has it is decided at call time.
        """
        if isinstance(self.target, DirectRef):
            return True
        return isinstance(self.target, NamedLookup) and self.owner is not None

    def resolve(self) -> Callable[..., Any] | None:
        target = self.target
        owner = self.owner

        if isinstance(target, DirectRef):
            fn = target.fn
            if owner is not None and inspect.isfunction(fn):
                return types.MethodType(fn, owner)
            return fn

        if isinstance(target, NamedLookup) and owner is not None:
            if isinstance(owner, Scope):
                found = owner.resolve(target.name)
            elif isinstance(owner, Mapping):
                found = owner.get(target.name)
            elif isinstance(target.name, str):
                found = getattr(owner, target.name, None)
            else:
                found = None
            return found if callable(found) else None

        return None

    def invoke(self, *extra_args: Any) -> Any:
        """Run the target once; call-time arguments go before the stored ones."""
        fn = self.resolve()
        if fn is None:
            return None

        self.last_result = fn(*extra_args, *self.args)
        return self.last_result

    def prepend_args(self, args: Iterable[Any]) -> None:
        self.args[:0] = list(args)

    def same_target(self, other: Task) -> bool:
        """Identity used by push_once()/defer_once(); direct and named targets never match."""
        a, b = self.target, other.target
        if isinstance(a, DirectRef) and isinstance(b, DirectRef):
            return _same_callable(a.fn, b.fn)
        if isinstance(a, NamedLookup) and isinstance(b, NamedLookup):
            return self.owner is other.owner and a.name == b.name
        return False

    def __repr__(self) -> str:
        return f"Task(owner={self.owner!r}, target={self.target!r}, args={self.args!r})"
