"""Identifier generation for domain entities.

Entities call ``generate_id()`` when no id is supplied. The factory behind it
lives in a ContextVar so callers (tests in particular) can swap in a
deterministic one for a block of code::

    with use_id_factory(sequential_ids("q")):
        Question(stem="...", ...).id  # "q-1"
"""

import itertools
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar

IdFactory = Callable[[], str]


def uuid_id() -> str:
    """Return a random UUID4 string."""
    return str(uuid.uuid4())


_id_factory: ContextVar[IdFactory] = ContextVar("id_factory", default=uuid_id)


def generate_id() -> str:
    """Produce a fresh id from the active factory."""
    return _id_factory.get()()


@contextmanager
def use_id_factory(factory: IdFactory) -> Iterator[IdFactory]:
    """Install ``factory`` as the id source for the enclosed block."""
    token = _id_factory.set(factory)
    try:
        yield factory
    finally:
        _id_factory.reset(token)


def sequential_ids(prefix: str = "id") -> IdFactory:
    """Build a factory yielding ``prefix-1``, ``prefix-2``, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"
