"""Request lifecycle controller for a single resume/job match analysis.

The controller owns one tagged state value and moves it through
``idle -> in_flight -> succeeded | failed``. Every state accepts a new
submission except ``in_flight``: a submit issued while a request is pending
is rejected without touching the network or the state.

Failures of any kind (local validation, non-success status, transport or
decoding problems, timeouts) end as a ``FailedState`` with one user-visible
message. Nothing is retried and nothing is raised past ``submit`` apart from
task cancellation, which is re-raised after the state is settled.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from pydantic import ValidationError

from resumatch.adapters.match_service.base import AbstractMatchServiceClient
from resumatch.core.config import MatchServiceSettings, settings
from resumatch.core.errors import (
    CANCELLED_MESSAGE,
    MALFORMED_RESPONSE_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    TRANSPORT_FALLBACK_MESSAGE,
    AppError,
    ServiceAppError,
    TransportAppError,
    ValidationAppError,
)
from resumatch.schemas.match import AnalysisInput, MatchResult, classify
from resumatch.schemas.state import (
    AnalysisState,
    FailedState,
    FailureKind,
    IdleState,
    InFlightState,
    SucceededState,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[AnalysisState], None]


def _failure_kind(error: AppError) -> FailureKind:
    if isinstance(error, ValidationAppError):
        return "validation"
    if isinstance(error, ServiceAppError):
        return "service"
    return "transport"


class MatchRequestController:
    """Mediates between raw user input and one outstanding analysis call.

    Attributes:
        client: Adapter used to reach the match service.
        timeout_seconds: Deadline for a single request.
        score_range_policy: Handling of scores outside [0, 100].
    """

    def __init__(
        self,
        client: AbstractMatchServiceClient,
        match_settings: MatchServiceSettings | None = None,
    ) -> None:
        cfg = match_settings or settings.match_service
        self.client = client
        self.timeout_seconds = cfg.timeout_seconds
        self.score_range_policy = cfg.score_range_policy
        self._state: AnalysisState = IdleState()
        self._listeners: list[StateListener] = []

    classify = staticmethod(classify)

    @property
    def state(self) -> AnalysisState:
        return self._state

    @property
    def is_in_flight(self) -> bool:
        return isinstance(self._state, InFlightState)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a callback invoked with every new state.

        Args:
            listener: Called synchronously after each transition.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _transition(self, state: AnalysisState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception(
                    "state_listener_failed",
                    extra={"status": state.status},
                )

    def _fail(self, error: AppError) -> None:
        kind = _failure_kind(error)
        logger.warning(
            "analysis_failed",
            extra={
                "failure_kind": kind,
                "error_code": error.code,
                "error_details": error.details,
            },
        )
        self._transition(
            FailedState(error_message=error.message, kind=kind, error_code=error.code)
        )

    def _validate(self, analysis_input: AnalysisInput) -> None:
        """Raise ValidationAppError when either field is blank.

        Raises:
            ValidationAppError: If resume or job description is empty after trimming.
        """
        missing = analysis_input.missing_fields()
        if missing:
            raise ValidationAppError(
                code="missing_fields",
                message=MISSING_FIELDS_MESSAGE,
                details={"context": {"missing": missing}},
            )

    def _parse_result(self, body: dict) -> MatchResult:
        """Turn a success body into a MatchResult under the score policy.

        Raises:
            TransportAppError: If the body does not fit the result shape.
        """
        try:
            result = MatchResult.model_validate(body)
            return result.with_score_policy(self.score_range_policy)
        except (ValidationError, ValueError) as exc:
            raise TransportAppError(
                code="match_service_malformed_response",
                message=MALFORMED_RESPONSE_MESSAGE,
                details={"error_type": type(exc).__name__},
            ) from exc

    async def _request(self, analysis_input: AnalysisInput) -> MatchResult:
        try:
            body = await asyncio.wait_for(
                self.client.analyze(
                    resume=analysis_input.resume,
                    job_description=analysis_input.job_description,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise TransportAppError(
                code="match_service_timeout",
                message=TRANSPORT_FALLBACK_MESSAGE,
                details={"timeout_seconds": self.timeout_seconds},
            ) from exc
        return self._parse_result(body)

    async def submit(self, analysis_input: AnalysisInput) -> AnalysisState:
        """Run one analysis cycle and return the resulting state.

        Args:
            analysis_input: Resume and job description as entered.

        Returns:
            The state after the cycle: succeeded or failed, or the unchanged
            in-flight state when the submission was rejected.

        Raises:
            asyncio.CancelledError: If the awaiting task is cancelled; the
                controller is left failed, never in flight.
        """
        if self.is_in_flight:
            logger.warning("analysis_rejected_in_flight")
            return self._state

        try:
            self._validate(analysis_input)
        except ValidationAppError as exc:
            self._fail(exc)
            return self._state

        logger.info(
            "analysis_submitted",
            extra={
                "resume_chars": len(analysis_input.resume),
                "job_description_chars": len(analysis_input.job_description),
            },
        )
        self._transition(InFlightState())

        try:
            result = await self._request(analysis_input)
        except AppError as exc:
            self._fail(exc)
        except asyncio.CancelledError:
            logger.warning("analysis_cancelled")
            self._transition(
                FailedState(error_message=CANCELLED_MESSAGE, kind="cancelled")
            )
            raise
        except Exception as exc:
            # Client implementations outside the adapter layer may raise anything
            self._fail(
                TransportAppError(
                    code="match_service_call_failed",
                    message=str(exc) or TRANSPORT_FALLBACK_MESSAGE,
                    details={"error_type": type(exc).__name__},
                )
            )
        else:
            logger.info(
                "analysis_succeeded",
                extra={
                    "final_match_percentage": result.final_match_percentage,
                    "missing_keyword_count": len(result.missing_keywords),
                },
            )
            self._transition(SucceededState(result=result))
        finally:
            if self.is_in_flight:
                self._transition(
                    FailedState(error_message=TRANSPORT_FALLBACK_MESSAGE, kind="transport")
                )

        return self._state
