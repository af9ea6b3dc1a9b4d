"""Stream résumé text through the LLM and emit one partial form update per parsed line."""

from dataclasses import dataclass
from typing import AsyncIterator, Callable, Optional

from openai import AsyncOpenAI

from resume_form_ai.config import LLM_TEMPERATURE, LLM_TIMEOUT_SECONDS, MODEL_NAME, OPENAI_API_KEY
from resume_form_ai.resume_pipeline.prompt_builder import build_extraction_prompt
from resume_form_ai.resume_pipeline.record_parser import parse_record
from resume_form_ai.resume_pipeline.stream_tokenizer import iter_lines
from resume_form_ai.schemas.form_record import FormUpdate
from resume_form_ai.utils.exceptions import StreamError
from resume_form_ai.utils.logger import get_logger

logger = get_logger(__name__)

# prompt -> async sequence of response text fragments
TextStream = Callable[[str], AsyncIterator[str]]

ABNORMAL_FINISH_REASONS = ("length", "content_filter")


@dataclass
class StreamStats:
    """Counters for one streamed response."""

    lines: int = 0
    records: int = 0

    @property
    def dropped(self) -> int:
        return self.lines - self.records


async def openai_text_stream(prompt: str) -> AsyncIterator[str]:
    """Default backend: OpenAI chat completion with stream=True, yielding content deltas."""
    if not OPENAI_API_KEY:
        logger.error("OPENAI_API_KEY is not set; cannot run resume extraction")
        raise StreamError("OPENAI_API_KEY is not set")
    async with AsyncOpenAI(api_key=OPENAI_API_KEY, timeout=LLM_TIMEOUT_SECONDS) as client:
        stream = await client.chat.completions.create(
            model=MODEL_NAME,
            messages=[{"role": "user", "content": prompt}],
            temperature=LLM_TEMPERATURE,
            stream=True,
        )
        async for chunk in stream:
            choice = chunk.choices[0] if chunk.choices else None
            if not choice:
                continue
            if choice.delta and choice.delta.content:
                yield choice.delta.content
            if choice.finish_reason in ABNORMAL_FINISH_REASONS:
                raise StreamError(f"Model stream ended early: finish_reason={choice.finish_reason}")


async def stream_form_updates(
    resume_text: str,
    on_update: Callable[[FormUpdate], None],
    text_stream: Optional[TextStream] = None,
) -> StreamStats:
    """
    Send résumé text to the model and call ``on_update`` once per valid record,
    in arrival order, while the response is still streaming.
    Any backend failure is raised as StreamError with a generic retry message.
    """
    backend = text_stream or openai_text_stream
    prompt = build_extraction_prompt(resume_text)
    stats = StreamStats()
    try:
        async for line in iter_lines(backend(prompt)):
            stats.lines += 1
            update = parse_record(line)
            if update is None:
                continue
            stats.records += 1
            on_update(update)
    except StreamError as e:
        logger.error("Error streaming data from text: %s", e)
        raise
    except Exception as e:
        logger.exception("Error streaming data from text: %s", e)
        raise StreamError(f"Model stream failed: {type(e).__name__}: {e}") from e

    logger.info(
        "Resume stream finished: lines=%s records=%s dropped=%s",
        stats.lines,
        stats.records,
        stats.dropped,
    )
    return stats
