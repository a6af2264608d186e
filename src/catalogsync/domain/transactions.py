"""Transaction helper around mirror units of work."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from catalogsync.domain.ports.persistence import MirrorStore
    from catalogsync.domain.ports.unit_of_work import MirrorUnitOfWork

type UnitOfWorkFactory = Callable[[], MirrorUnitOfWork]


def run_in_transaction[T](
    unit_of_work_factory: UnitOfWorkFactory,
    work: Callable[[MirrorStore], T],
) -> T:
    """Run ``work`` against the mirror and commit, or roll everything back on error."""

    with unit_of_work_factory() as uow:
        result = work(uow.repositories.mirror)
        uow.commit()
    return result
