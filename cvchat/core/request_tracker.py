"""Request tokens for in-flight backend calls.

Every backend operation runs under a token for its scope. Restarting the
session, switching templates or closing a screen invalidates the tokens of
the affected scopes; a response that arrives for an invalidated token is
dropped instead of being applied to state that has moved on.
"""

import concurrent.futures
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional

from cvchat.config.logging_config import get_logger

logger = get_logger(__name__)


class RequestScope(str, Enum):
    """Kinds of backend calls tracked independently."""

    BOOTSTRAP = "bootstrap"
    CHAT = "chat"
    FORM = "form"
    PREVIEW = "preview"
    PDF = "pdf"


@dataclass(frozen=True)
class RequestToken:
    scope: RequestScope
    token_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    issued_at: datetime = field(default_factory=datetime.now)


class StaleResponseError(Exception):
    """Raised by :meth:`RequestTracker.run` when a token was invalidated mid-call."""

    def __init__(self, token: RequestToken):
        super().__init__(f"Response for {token.scope.value} request {token.token_id} is stale")
        self.token = token


class RequestTracker:
    """Issues, validates and invalidates request tokens."""

    def __init__(self, max_workers: int = 2):
        self._lock = threading.RLock()
        self._active: Dict[RequestScope, RequestToken] = {}
        self._max_workers = max_workers
        self._executor: Optional[concurrent.futures.ThreadPoolExecutor] = None

    def begin(self, scope: RequestScope) -> RequestToken:
        """Issue a token for ``scope``; any earlier token of that scope becomes stale."""
        token = RequestToken(scope=RequestScope(scope))
        with self._lock:
            self._active[token.scope] = token
        return token

    def is_current(self, token: RequestToken) -> bool:
        with self._lock:
            return self._active.get(token.scope) == token

    def finish(self, token: RequestToken) -> None:
        with self._lock:
            if self._active.get(token.scope) == token:
                del self._active[token.scope]

    def in_flight(self, scope: RequestScope) -> bool:
        with self._lock:
            return RequestScope(scope) in self._active

    def invalidate(self, scopes: Optional[Iterable[RequestScope]] = None) -> None:
        """Invalidate tokens of ``scopes``, or of every scope when omitted."""
        with self._lock:
            targets = list(self._active) if scopes is None else [RequestScope(s) for s in scopes]
            for scope in targets:
                if self._active.pop(scope, None) is not None:
                    logger.debug("Invalidated in-flight %s request", scope.value)

    def run(self, scope: RequestScope, call: Callable[[], Any]) -> Any:
        """Run ``call`` under a fresh token.

        Raises:
            StaleResponseError: the token was invalidated before ``call`` returned.
        """
        token = self.begin(scope)
        try:
            result = call()
        except BaseException:
            self.finish(token)
            raise
        if not self.is_current(token):
            logger.info("Discarding late %s response", token.scope.value)
            raise StaleResponseError(token)
        self.finish(token)
        return result

    def submit(self, scope: RequestScope, call: Callable[[], Any]) -> concurrent.futures.Future:
        """Run :meth:`run` on the tracker's thread pool."""
        with self._lock:
            if self._executor is None:
                self._executor = concurrent.futures.ThreadPoolExecutor(
                    max_workers=self._max_workers, thread_name_prefix="cvchat-request"
                )
            executor = self._executor
        return executor.submit(self.run, scope, call)

    def shutdown(self) -> None:
        self.invalidate()
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=False)
