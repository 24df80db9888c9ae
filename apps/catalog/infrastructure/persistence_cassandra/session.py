"""Cassandra Session Helpers.

드라이버의 콜백 기반 execute_async를 asyncio에서 await 가능하게 연결.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import Cluster, ResultSet, Session
from cassandra.query import SimpleStatement


def create_cluster(
    contact_points: Sequence[str],
    port: int = 9042,
    username: str | None = None,
    password: str | None = None,
) -> Cluster:
    """Cluster 생성 (연결은 호출자가 connect로 수행)."""
    auth_provider = None
    if username:
        auth_provider = PlainTextAuthProvider(username=username, password=password or "")
    return Cluster(list(contact_points), port=port, auth_provider=auth_provider)


def _settle(future: asyncio.Future, error: BaseException | None) -> None:
    if future.done():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(None)


async def execute_async(
    session: Session,
    query: str,
    parameters: Sequence[Any] | None = None,
    *,
    fetch_size: int | None = None,
    paging_state: bytes | None = None,
) -> ResultSet:
    """CQL 실행 후 ResultSet 반환.

    Args:
        session: Cassandra 세션
        query: CQL (%s 바인드 파라미터)
        parameters: 바인드 값
        fetch_size: 페이지 크기 (None이면 드라이버 기본값)
        paging_state: 이전 페이지의 paging state

    Returns:
        첫 페이지가 로드된 ResultSet (current_rows, paging_state)
    """
    statement_options: dict[str, Any] = {}
    if fetch_size is not None:
        statement_options["fetch_size"] = fetch_size
    statement = SimpleStatement(query, **statement_options)

    loop = asyncio.get_running_loop()
    done: asyncio.Future = loop.create_future()

    # 콜백은 드라이버 이벤트 루프 스레드에서 호출됨
    response = session.execute_async(statement, parameters, paging_state=paging_state)
    response.add_callbacks(
        callback=lambda _rows: loop.call_soon_threadsafe(_settle, done, None),
        errback=lambda error: loop.call_soon_threadsafe(_settle, done, error),
    )
    await done
    return response.result()
