"""Image analysis on top of a pluggable vision-language transport.

The transport (HTTP client, auth, model choice) lives outside this
package and only has to satisfy :class:`VisionTransport`.  Transports
report failures as :class:`VisionError` subclasses;
:meth:`ImageAnalyzer.analyze` converts every failure into a failed
:class:`AnalysisResult` so callers always receive a structured outcome.
"""

from __future__ import annotations

import time
from typing import Final, Protocol, runtime_checkable

import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from vision_assist.models.analysis import AnalysisResult
from vision_assist.models.enums import VisionErrorKind
from vision_assist.services.response_parser import parse

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------

ANALYSIS_PROMPT: Final[str] = """\
Analyze this image and describe what you see. Focus on objects, people, \
obstacles, and navigation-relevant information. Also detect emotions in \
any visible faces (happiness, sadness, anger, fear, surprise, disgust - \
the 6 basic emotions). Provide a clear, concise description suitable for \
someone with vision impairment. Format your response as: \
"Description: [detailed description]. Objects: [list of objects with \
approximate positions]. Hazards: [any obstacles or dangers]. Emotions: \
[list detected emotions from faces, if any]."\
"""

EMPTY_RESPONSE_TEXT: Final[str] = "Unable to analyze image."

_USER_MESSAGES: Final[dict[VisionErrorKind, str]] = {
    VisionErrorKind.QUOTA: "You exceeded your current quota, please check your plan and billing details.",
    VisionErrorKind.AUTHENTICATION: "Invalid API key. Please check your API configuration.",
    VisionErrorKind.RATE_LIMIT: "Rate limit exceeded. Please wait a moment and try again.",
}

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class VisionError(Exception):
    """A classified failure reported by a vision transport."""

    kind: VisionErrorKind = VisionErrorKind.FAILURE

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    @property
    def user_message(self) -> str:
        return _USER_MESSAGES.get(self.kind, self.message or "Image analysis failed.")


class VisionAuthError(VisionError):
    kind = VisionErrorKind.AUTHENTICATION


class VisionRateLimitError(VisionError):
    kind = VisionErrorKind.RATE_LIMIT


class VisionQuotaError(VisionError):
    kind = VisionErrorKind.QUOTA


def classify_transport_error(status: int, message: str = "") -> VisionError:
    """Turn an HTTP status and provider message into a :class:`VisionError`.

    Quota and billing wording wins over the status code.
    """
    lowered = message.lower()
    if "quota" in lowered or "billing" in lowered:
        return VisionQuotaError(message)
    if status == 401:
        return VisionAuthError(message)
    if status == 429:
        return VisionRateLimitError(message)
    return VisionError(message or f"API error: {status}")


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, VisionError) and exc.kind is VisionErrorKind.FAILURE


# ---------------------------------------------------------------------------
# Transport protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class VisionTransport(Protocol):
    """Sends one image with an instruction prompt and returns the model text."""

    async def describe(self, image: bytes, prompt: str) -> str: ...


# ---------------------------------------------------------------------------
# ImageAnalyzer
# ---------------------------------------------------------------------------


class ImageAnalyzer:
    """Runs one frame through the transport and the response parser.

    Generic transport failures are retried with exponential backoff;
    authentication, rate-limit and quota failures are returned at once.
    """

    __slots__ = ("_max_attempts", "_max_wait", "_prompt", "_transport")

    def __init__(
        self,
        transport: VisionTransport,
        *,
        prompt: str = ANALYSIS_PROMPT,
        max_attempts: int = 2,
        max_wait: float = 4.0,
    ) -> None:
        self._transport = transport
        self._prompt = prompt
        self._max_attempts = max_attempts
        self._max_wait = max_wait

    async def _describe(self, image: bytes) -> str:
        retrying = AsyncRetrying(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=0.5, max=self._max_wait),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._transport.describe(image, self._prompt)
        raise AssertionError("unreachable")  # pragma: no cover

    async def analyze(self, image: bytes) -> AnalysisResult:
        start = time.perf_counter()
        try:
            raw_text = await self._describe(image)
        except VisionError as exc:
            logger.warning(
                "analysis.failed",
                kind=exc.kind.value,
                error=exc.message,
                processing_time_ms=_elapsed_ms(start),
            )
            return AnalysisResult.failure(exc.user_message, exc.kind)
        except Exception as exc:
            logger.warning("analysis.failed", kind=VisionErrorKind.FAILURE.value, exc_info=True)
            return AnalysisResult.failure(str(exc) or type(exc).__name__)

        if not raw_text or not raw_text.strip():
            raw_text = EMPTY_RESPONSE_TEXT

        result = AnalysisResult.from_parsed(parse(raw_text), raw_response=raw_text)
        logger.info(
            "analysis.completed",
            image_bytes=len(image),
            response_length=len(raw_text),
            objects=len(result.objects),
            hazards=len(result.hazards),
            emotions=[emotion.value for emotion in result.emotions],
            processing_time_ms=_elapsed_ms(start),
        )
        return result


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
