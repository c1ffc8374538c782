"""Query-to-display pipeline.

Ties query submission, the blog search client, error alerts and the sort
prompt together into one observable, ordered list. All state changes run
in handlers of a single ``EventDispatcher``; only the network call runs in
an ``asyncio.Task``, and its completion comes back as an event tagged with
the generation of the query that started it. A newer query cancels the
older task, and any result from an older generation is dropped.
"""

import asyncio
import logging
from typing import Callable, Optional, Protocol

from daumblog.events import (
    AlertAnswered,
    AlertRaised,
    EventDispatcher,
    QuerySubmitted,
    RecordsChanged,
    SearchCompleted,
    SortRequested,
    SortSelected,
)
from daumblog.models import (
    AlertRequest,
    DisplayRecord,
    ErrorInfo,
    SearchFailure,
    SearchResult,
    SearchSuccess,
    SortAction,
)
from daumblog.normalize import map_to_display_records
from daumblog.sorting import MissingDatetime, sort_records

logger = logging.getLogger(__name__)

ERROR_ALERT = AlertRequest(
    title="Oops!",
    message="An unexpected error occurred. Please try again later.",
    actions=(SortAction.CONFIRM,),
    style="alert",
)

SORT_ALERT = AlertRequest(
    actions=(SortAction.TITLE, SortAction.DATETIME, SortAction.CANCEL),
    style="action_sheet",
)


class SearchClient(Protocol):
    async def search(self, query: str) -> SearchResult: ...


class QueryPipeline:
    """Coordinates searches, error alerts and sorting for one result list."""

    def __init__(
        self,
        client: SearchClient,
        *,
        initial_criterion: SortAction = SortAction.TITLE,
        missing_datetime: MissingDatetime = "now",
        dispatcher: Optional[EventDispatcher] = None,
    ) -> None:
        if not initial_criterion.is_sort:
            raise ValueError(f"{initial_criterion.value!r} is not a sort criterion")
        self.client = client
        self.missing_datetime = missing_datetime
        self._dispatcher = dispatcher or EventDispatcher()

        self._criterion = initial_criterion
        self._last_query: Optional[str] = None
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._source: Optional[list[DisplayRecord]] = None
        self._records: tuple[DisplayRecord, ...] = ()
        self._pending_alert: Optional[AlertRequest] = None

        self._dispatcher.subscribe(QuerySubmitted, self._on_query_submitted)
        self._dispatcher.subscribe(SearchCompleted, self._on_search_completed)
        self._dispatcher.subscribe(SortSelected, self._on_sort_selected)
        self._dispatcher.subscribe(SortRequested, self._on_sort_requested)
        self._dispatcher.subscribe(AlertAnswered, self._on_alert_answered)

    # -- inputs -----------------------------------------------------------

    def submit(self, text: str) -> None:
        """Submit search text. Must be called from the running event loop."""
        self._dispatcher.publish(QuerySubmitted(text))

    def select_sort(self, action: SortAction) -> None:
        self._dispatcher.publish(SortSelected(action))

    def request_sort(self) -> None:
        """Ask the presentation surface to prompt for a sort criterion."""
        self._dispatcher.publish(SortRequested())

    def respond(self, action: SortAction) -> None:
        """Answer the pending alert."""
        self._dispatcher.publish(AlertAnswered(action))

    # -- outputs ----------------------------------------------------------

    def on_records(self, callback: Callable[[tuple[DisplayRecord, ...]], None]) -> Callable[[], None]:
        return self._dispatcher.subscribe(RecordsChanged, lambda event: callback(event.records))

    def on_alert(self, callback: Callable[[AlertRequest], None]) -> Callable[[], None]:
        return self._dispatcher.subscribe(AlertRaised, lambda event: callback(event.alert))

    @property
    def dispatcher(self) -> EventDispatcher:
        return self._dispatcher

    @property
    def records(self) -> tuple[DisplayRecord, ...]:
        return self._records

    @property
    def criterion(self) -> SortAction:
        return self._criterion

    @property
    def pending_alert(self) -> Optional[AlertRequest]:
        return self._pending_alert

    @property
    def last_query(self) -> Optional[str]:
        return self._last_query

    # -- lifecycle --------------------------------------------------------

    async def wait_idle(self) -> None:
        """Wait until no search is in flight."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    async def aclose(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait({task})

    # -- handlers ---------------------------------------------------------

    def _on_query_submitted(self, event: QuerySubmitted) -> None:
        query = event.text.strip()
        if not query:
            logger.debug("Ignoring blank query")
            return
        if query == self._last_query:
            logger.debug(f"Ignoring repeated query {query!r}")
            return

        # Raises outside a running loop; nothing has changed yet at that point.
        loop = asyncio.get_running_loop()
        generation = self._generation + 1
        task = loop.create_task(self._run_search(generation, query))

        self._last_query = query
        self._generation = generation
        if self._task is not None and not self._task.done():
            logger.debug(f"Cancelling search superseded by {query!r}")
            self._task.cancel()
        self._task = task

    async def _run_search(self, generation: int, query: str) -> None:
        try:
            result = await self.client.search(query)
        except Exception as e:
            logger.exception(f"Search client raised for {query!r}")
            result = SearchFailure(query=query, error=ErrorInfo(message=str(e) or type(e).__name__))
        self._dispatcher.publish(SearchCompleted(generation, result))

    def _on_search_completed(self, event: SearchCompleted) -> None:
        if event.generation != self._generation:
            logger.debug(f"Discarding stale result for {event.result.query!r}")
            return

        result = event.result
        if isinstance(result, SearchSuccess):
            self._source = map_to_display_records(result.payload)
            self._recompute()
        else:
            logger.warning(f"error: {result.error.message}")
            self._raise_alert(ERROR_ALERT)

    def _on_sort_selected(self, event: SortSelected) -> None:
        if not event.action.is_sort:
            return
        self._criterion = event.action
        self._recompute()

    def _on_sort_requested(self, event: SortRequested) -> None:
        self._raise_alert(SORT_ALERT)

    def _on_alert_answered(self, event: AlertAnswered) -> None:
        alert = self._pending_alert
        if alert is None or event.action not in alert.actions:
            logger.warning(f"Ignoring answer {event.action.value!r}: not offered by the pending alert")
            return
        self._pending_alert = None
        self._dispatcher.publish(SortSelected(event.action))

    def _raise_alert(self, alert: AlertRequest) -> None:
        # A newer alert replaces any unanswered one.
        self._pending_alert = alert
        self._dispatcher.publish(AlertRaised(alert))

    def _recompute(self) -> None:
        if self._source is None:
            return
        self._records = tuple(
            sort_records(self._source, self._criterion, missing_datetime=self.missing_datetime)
        )
        self._dispatcher.publish(RecordsChanged(self._records, self._criterion))
