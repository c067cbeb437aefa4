"""
tests/test_main.py
Unit tests for src/main.py, FastAPI endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from src.project.base import AbstractProject


class Freestyle(AbstractProject):
    def schedule_build_with_actions(self, quiet_period, actions):
        return "future"


@pytest.fixture
def client():
    from src.main import app

    with TestClient(app) as test_client:
        yield test_client


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_hook_log_unknown_project_returns_404(client):
    response = client.get("/job/missing/GitBucketPollLog")
    assert response.status_code == 404
    assert "missing" in response.json()["detail"]


def test_hook_log_before_first_push_returns_404(client, tmp_path):
    from src.main import app, bind_trigger

    bind_trigger(app, "demo", Freestyle("demo", root_dir=tmp_path))

    response = client.get("/job/demo/GitBucketPollLog")
    assert response.status_code == 404


def test_hook_log_returns_plain_text_after_push(client, tmp_path, push):
    from src.main import app, bind_trigger

    trigger = bind_trigger(app, "demo", Freestyle("demo", root_dir=tmp_path))
    trigger.on_push_notification(push)
    assert app.state.dispatch_queue.join(timeout=5)

    response = client.get("/job/demo/GitBucketPollLog")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "Pushed by: bob" in response.text
    assert "Branch: refs/heads/main" in response.text


def test_bind_trigger_uses_pass_through_default(client, tmp_path, monkeypatch):
    from src.main import app, bind_trigger

    monkeypatch.setenv("GITBUCKET_PASS_THROUGH_GIT_COMMIT", "true")
    assert bind_trigger(app, "pinned", Freestyle("pinned", root_dir=tmp_path)).pass_through_git_commit is True
    assert bind_trigger(app, "explicit", Freestyle("explicit", root_dir=tmp_path), False).pass_through_git_commit is False


def test_bind_trigger_rejects_unsupported_project(client):
    from src.common.errors import TriggerNotApplicableError
    from src.main import app, bind_trigger

    with pytest.raises(TriggerNotApplicableError):
        bind_trigger(app, "odd", object())
    assert "odd" not in app.state.triggers


def test_bind_trigger_routes_tierless_project_through_host_queue(client, tmp_path, push):
    from unittest.mock import MagicMock

    from src.main import app, bind_trigger
    from src.scheduling.negotiator import ScheduleMechanism
    from src.trigger.applicability import ApplicabilityFilter

    class PipelineJob:
        name = "pipeline"
        root_dir = tmp_path

    build_queue = MagicMock()
    build_queue.schedule_via_queue.return_value = "queue-item"
    app.state.build_queue = build_queue
    app.state.applicability = ApplicabilityFilter(pipeline_types=(PipelineJob,))

    job = PipelineJob()
    outcome = bind_trigger(app, "pipeline", job).process(push)

    build_queue.schedule_via_queue.assert_called_once()
    assert build_queue.schedule_via_queue.call_args.args[0] is job
    assert outcome.succeeded is True
    assert outcome.mechanism is ScheduleMechanism.QUEUE_FALLBACK
