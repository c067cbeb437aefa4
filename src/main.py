"""
src/main.py
FastAPI application: health check and the read-only GitBucket hook log.
Endpoints: GET /health, GET /job/{project_name}/GitBucketPollLog
"""

from contextlib import asynccontextmanager
import logging
from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from src.common.errors import AuditLogIOError, AuditLogNotFoundError
from src.config import Config
from src.dispatch.queue import SerialDispatchQueue
from src.scheduling.capabilities import BuildQueue
from src.scheduling.negotiator import SchedulingNegotiator
from src.trigger.applicability import ApplicabilityFilter
from src.trigger.push_trigger import GitBucketPushTrigger

logger = logging.getLogger(__name__)
load_dotenv()


def create_dispatch_queue() -> SerialDispatchQueue:
    """Create the worker pool shared by every bound trigger."""
    workers = Config.get_max_workers()
    logger.info("Starting GitBucket dispatch queue with %d workers.", workers)
    return SerialDispatchQueue(max_workers=workers)


def bind_trigger(
    app: FastAPI,
    project_name: str,
    project: Any,
    pass_through_git_commit: bool | None = None,
    build_queue: BuildQueue | None = None,
) -> GitBucketPushTrigger:
    """
    Bind a push trigger to `project` and expose its hook log under `project_name`.

    Args:
        app: Application holding the shared dispatch queue.
        project_name: Name used in the hook log URL.
        project: Project to build on push.
        pass_through_git_commit: Pin builds to the pushed commit; defaults to
            GITBUCKET_PASS_THROUGH_GIT_COMMIT.
        build_queue: Host queue for projects exposing no scheduling tier;
            defaults to `app.state.build_queue`.
    Returns:
        The bound trigger.
    Raises:
        TriggerNotApplicableError: When the project kind is not supported.
    """
    if pass_through_git_commit is None:
        pass_through_git_commit = Config.pass_through_git_commit()
    if build_queue is None:
        build_queue = app.state.build_queue
    trigger = GitBucketPushTrigger(
        pass_through_git_commit,
        dispatch_queue=app.state.dispatch_queue,
        negotiator=SchedulingNegotiator(build_queue),
        default_root_dir=Config.get_root_dir(),
    )
    trigger.start(project, applicability=app.state.applicability)
    app.state.triggers[project_name] = trigger
    return trigger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan hook for startup/shutdown side effects."""
    app.state.dispatch_queue = create_dispatch_queue()
    app.state.triggers = {}
    # Set by the host before binding projects that rely on the queue fallback.
    app.state.build_queue = None
    app.state.applicability = ApplicabilityFilter.from_config()
    try:
        yield
    finally:
        app.state.dispatch_queue.shutdown(wait=True)


app = FastAPI(title="GitBucket Push Dispatch", lifespan=lifespan)


@app.get("/health")
def health_check() -> dict[str, str]:
    """Return service health status."""
    return {"status": "ok"}


@app.get("/job/{project_name}/GitBucketPollLog", response_class=PlainTextResponse)
def hook_log(project_name: str) -> PlainTextResponse:
    """
    Return the last processed push for a bound project.

    Args:
        project_name: Name the trigger was registered under.
    Returns:
        Plain-text hook log.
    Raises:
        HTTPException 404: Unknown project or no push processed yet.
        HTTPException 500: Log file unreadable.
    """
    trigger = app.state.triggers.get(project_name)
    if trigger is None:
        raise HTTPException(status_code=404, detail=f"No GitBucket trigger bound to {project_name}.")
    action = trigger.project_actions()[0]
    try:
        return PlainTextResponse(action.get_log())
    except AuditLogNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except AuditLogIOError as exc:
        logger.exception("Failed to read hook log for %s.", project_name)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
