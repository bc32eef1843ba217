"""Tests for SQLAlchemy repositories."""

from __future__ import annotations

from sqlalchemy.orm import Session  # noqa: TC002

from poolclaim.adapters.sqlalchemy.repositories import (
    SqlAlchemyClaimFromPoolRepository,
    SqlAlchemyStatefulListRepository,
)
from poolclaim.domain.model import ClaimFromPoolRecord, StatefulListRecord


def test_claim_repository_looks_up_by_name_and_id(sqlite_session: Session) -> None:
    repository = SqlAlchemyClaimFromPoolRepository(sqlite_session)
    repository.add(ClaimFromPoolRecord(name="hosts", id="c1", pool=("a",), claimers=("x",)))
    sqlite_session.commit()

    by_name = repository.get("hosts")
    by_id = repository.get_by_id("c1")

    assert by_name is not None
    assert by_name is by_id
    assert repository.get("missing") is None
    assert repository.get_by_id("missing") is None


def test_list_is_ordered_by_name(sqlite_session: Session) -> None:
    repository = SqlAlchemyStatefulListRepository(sqlite_session)
    for name, record_id in (("zeta", "3"), ("alpha", "1"), ("mid", "2")):
        repository.add(StatefulListRecord(name=name, id=record_id))
    sqlite_session.commit()

    assert [record.name for record in repository.list()] == ["alpha", "mid", "zeta"]


def test_remove_deletes_row(sqlite_session: Session) -> None:
    repository = SqlAlchemyStatefulListRepository(sqlite_session)
    record = StatefulListRecord(name="seen", id="l1", input=("p",), output=("p",))
    repository.add(record)
    sqlite_session.commit()

    repository.remove(record)
    sqlite_session.commit()

    assert repository.get("seen") is None
    assert repository.list() == []


def test_repositories_are_scoped_to_their_kind(sqlite_session: Session) -> None:
    claims = SqlAlchemyClaimFromPoolRepository(sqlite_session)
    lists = SqlAlchemyStatefulListRepository(sqlite_session)
    claims.add(ClaimFromPoolRecord(name="shared", id="c1"))
    lists.add(StatefulListRecord(name="shared", id="l1"))
    sqlite_session.commit()

    assert claims.get_by_id("l1") is None
    assert lists.get_by_id("c1") is None
    assert lists.get("shared") is not None
