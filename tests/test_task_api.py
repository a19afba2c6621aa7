# tests/test_task_api.py

from __future__ import annotations

import httpx
import pytest

import adapters.task_api as task_api
from adapters.http_client import build_async_client
from adapters.task_api import TaskApiClient, build_request_failure
from core.domain.errors import RequestFailure
from core.domain.models import TaskStatus

from .fakes import FakeTasksApi, project, task


@pytest.mark.asyncio
async def test_single_project_single_task(api: FakeTasksApi, task_client: TaskApiClient) -> None:
    api.set("/projects", [project("p1")])
    api.set("/projects/p1/tasks", [task("t1", "p1", title="X", status="TODO")])

    result = await task_client.fetch_all_tasks()

    assert [t.id for t in result] == ["t1"]
    assert result[0].project_id == "p1"
    assert result[0].title == "X"
    assert result[0].status is TaskStatus.TODO


@pytest.mark.asyncio
async def test_no_projects_short_circuits(api: FakeTasksApi, task_client: TaskApiClient) -> None:
    api.set("/projects", [])

    assert await task_client.fetch_all_tasks() == []
    assert api.requests == ["/projects"]


@pytest.mark.asyncio
async def test_non_list_project_body_is_treated_as_empty(
    api: FakeTasksApi, task_client: TaskApiClient
) -> None:
    api.set("/projects", {"items": [project("p1")]})
    api.set("/projects/p1/tasks", [task("t1", "p1")])

    assert await task_client.fetch_all_tasks() == []
    assert api.requests == ["/projects"]


@pytest.mark.asyncio
async def test_merge_keeps_project_order_not_completion_order(
    api: FakeTasksApi, task_client: TaskApiClient
) -> None:
    api.set("/projects", [project("A"), project("B"), project("C")])
    api.set("/projects/A/tasks", [task("a1", "A"), task("a2", "A")], delay=0.06)
    api.set("/projects/B/tasks", [task("b1", "B")], delay=0.03)
    api.set("/projects/C/tasks", [task("c1", "C"), task("c2", "C")])

    result = await task_client.fetch_all_tasks()

    assert [t.id for t in result] == ["a1", "a2", "b1", "c1", "c2"]
    assert api.completed[1:] == ["/projects/C/tasks", "/projects/B/tasks", "/projects/A/tasks"]


@pytest.mark.asyncio
async def test_task_fetches_run_concurrently(api: FakeTasksApi, task_client: TaskApiClient) -> None:
    api.set("/projects", [project("p1"), project("p2"), project("p3")])
    for pid in ("p1", "p2", "p3"):
        api.set(f"/projects/{pid}/tasks", [task(f"{pid}-t", pid)], delay=0.02)

    await task_client.fetch_all_tasks()

    assert api.max_in_flight == 3


@pytest.mark.asyncio
async def test_project_list_failure_fails_fast(api: FakeTasksApi, task_client: TaskApiClient) -> None:
    api.set("/projects", {"message": "boom"}, status=500)
    api.set("/projects/p1/tasks", [task("t1", "p1")])

    with pytest.raises(RequestFailure) as excinfo:
        await task_client.fetch_all_tasks()

    assert excinfo.value.status_code == 500
    assert str(excinfo.value) == "Request failed with status 500: boom"
    assert api.requests == ["/projects"]


@pytest.mark.asyncio
async def test_project_task_failure_discards_partial_results(
    api: FakeTasksApi, task_client: TaskApiClient
) -> None:
    api.set("/projects", [project("A"), project("B")])
    api.set("/projects/A/tasks", [task("a1", "A")])
    api.set("/projects/B/tasks", {"message": "not found"}, status=404)

    with pytest.raises(RequestFailure) as excinfo:
        await task_client.fetch_all_tasks()

    assert excinfo.value.status_code == 404
    assert "404" in str(excinfo.value)
    assert "not found" in str(excinfo.value)
    assert sorted(api.requests) == ["/projects", "/projects/A/tasks", "/projects/B/tasks"]


@pytest.mark.asyncio
async def test_lowest_index_failure_wins(api: FakeTasksApi, task_client: TaskApiClient) -> None:
    api.set("/projects", [project("A"), project("B"), project("C")])
    api.set("/projects/A/tasks", {"message": "slow failure"}, status=503, delay=0.05)
    api.set("/projects/B/tasks", {"message": "fast failure"}, status=404)
    api.set("/projects/C/tasks", [task("c1", "C")])

    with pytest.raises(RequestFailure) as excinfo:
        await task_client.fetch_all_tasks()

    assert excinfo.value.status_code == 503
    assert excinfo.value.details == "slow failure"
    # fan-in waits for every request to settle
    assert len(api.completed) == 4


@pytest.mark.asyncio
async def test_plain_text_error_body_uses_status_only(
    api: FakeTasksApi, task_client: TaskApiClient
) -> None:
    api.set("/projects", "oops", status=502)

    with pytest.raises(RequestFailure) as excinfo:
        await task_client.fetch_all_tasks()

    assert str(excinfo.value) == "Request failed with status 502"
    assert excinfo.value.details is None


@pytest.mark.asyncio
async def test_repeated_calls_return_equal_results(
    api: FakeTasksApi, task_client: TaskApiClient
) -> None:
    api.set("/projects", [project("p1"), project("p2")])
    api.set("/projects/p1/tasks", [task("t1", "p1"), task("t2", "p1", status="DONE")])
    api.set("/projects/p2/tasks", [task("t3", "p2", status="IN_PROGRESS")])

    first = await task_client.fetch_all_tasks()
    second = await task_client.fetch_all_tasks()

    assert first == second
    assert [t.id for t in first] == ["t1", "t2", "t3"]


@pytest.mark.asyncio
async def test_description_absent_or_null(api: FakeTasksApi, task_client: TaskApiClient) -> None:
    api.set("/projects", [project("p1")])
    api.set(
        "/projects/p1/tasks",
        [task("t1", "p1"), task("t2", "p1", description=None), task("t3", "p1", description="Write docs")],
    )

    result = await task_client.fetch_all_tasks()

    assert [t.description for t in result] == [None, None, "Write docs"]


@pytest.mark.asyncio
async def test_transport_errors_propagate_unchanged(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with build_async_client(settings, transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(httpx.ConnectError):
            await TaskApiClient(settings, client=client).fetch_all_tasks()


@pytest.mark.asyncio
async def test_fetch_projects_and_project_tasks(api: FakeTasksApi, task_client: TaskApiClient) -> None:
    api.set("/projects", [project("p1", "Alpha")])
    api.set("/projects/p1/tasks", [task("t1", "p1")])

    projects = await task_client.fetch_projects()
    tasks = await task_client.fetch_project_tasks("p1")

    assert [(p.id, p.name) for p in projects] == [("p1", "Alpha")]
    assert [t.id for t in tasks] == ["t1"]


@pytest.mark.asyncio
async def test_owned_client_is_built_from_settings(
    monkeypatch: pytest.MonkeyPatch, settings, api: FakeTasksApi
) -> None:
    api.set("/projects", [project("p1")])
    api.set("/projects/p1/tasks", [task("t1", "p1")])
    built: list[object] = []

    def fake_build(s):
        built.append(s)
        return build_async_client(s, transport=api.transport())

    monkeypatch.setattr(task_api, "build_async_client", fake_build)

    result = await TaskApiClient(settings).fetch_all_tasks()

    assert [t.id for t in result] == ["t1"]
    assert built == [settings]


class TestBuildRequestFailure:
    def test_message_field_is_appended(self) -> None:
        failure = build_request_failure(httpx.Response(404, json={"message": "not found"}))
        assert str(failure) == "Request failed with status 404: not found"
        assert failure.status_code == 404
        assert failure.details == "not found"

    def test_null_message_gives_empty_details(self) -> None:
        failure = build_request_failure(httpx.Response(400, json={"message": None}))
        assert str(failure) == "Request failed with status 400: "

    def test_non_string_message_is_coerced(self) -> None:
        failure = build_request_failure(httpx.Response(422, json={"message": 42}))
        assert str(failure) == "Request failed with status 422: 42"

    def test_object_without_message(self) -> None:
        failure = build_request_failure(httpx.Response(500, json={"code": 500}))
        assert str(failure) == "Request failed with status 500"

    def test_array_body(self) -> None:
        failure = build_request_failure(httpx.Response(500, json=["message"]))
        assert str(failure) == "Request failed with status 500"

    @pytest.mark.parametrize("body", ["oops", "", "{not json"])
    def test_unparseable_body_keeps_status(self, body: str) -> None:
        failure = build_request_failure(httpx.Response(503, text=body))
        assert str(failure) == "Request failed with status 503"
        assert failure.details is None

    def test_deeply_nested_body_keeps_status(self) -> None:
        body = "[" * 100_000 + "]" * 100_000

        failure = build_request_failure(httpx.Response(500, text=body))

        assert str(failure) == "Request failed with status 500"
        assert failure.details is None


@pytest.mark.asyncio
async def test_unreadable_error_body_surfaces_http_failure(
    api: FakeTasksApi, task_client: TaskApiClient
) -> None:
    api.set("/projects", [project("p1")])
    api.set("/projects/p1/tasks", "[" * 100_000 + "]" * 100_000, status=500)

    with pytest.raises(RequestFailure) as excinfo:
        await task_client.fetch_all_tasks()

    assert excinfo.value.status_code == 500
