import asyncio
from itertools import combinations

from resume_form_ai.resume_pipeline.stream_tokenizer import LineBuffer, iter_lines

RESPONSE = "firstName::Ann\nskills::Go, SQL\n\nlanguages::French,German\nemail::a@b.co"


def _expected_lines(text: str) -> list:
    return [line.strip() for line in text.split("\n") if line.strip()]


def _tokenize(fragments) -> list:
    buffer = LineBuffer()
    lines = []
    for fragment in fragments:
        lines.extend(buffer.feed(fragment))
    tail = buffer.flush()
    if tail:
        lines.append(tail)
    return lines


def _split(text: str, cuts) -> list:
    bounds = [0, *cuts, len(text)]
    return [text[a:b] for a, b in zip(bounds, bounds[1:])]


def test_line_split_mid_record_is_reassembled():
    buffer = LineBuffer()
    assert buffer.feed("firstName::A") == []
    assert buffer.pending == "firstName::A"
    assert buffer.feed("nn\nskills::SQL\n") == ["firstName::Ann", "skills::SQL"]
    assert buffer.flush() is None


def test_trailing_unterminated_fragment_is_flushed_once():
    buffer = LineBuffer()
    assert buffer.feed("phone::123\nemail::x@y.z  ") == ["phone::123"]
    assert buffer.flush() == "email::x@y.z"
    assert buffer.flush() is None


def test_blank_lines_and_crlf_are_trimmed():
    assert _tokenize(["a::1\r\n\r\n  \n", "b::2\r\n"]) == ["a::1", "b::2"]


def test_empty_and_none_fragments_are_ignored():
    assert _tokenize([None, "", "x::1", None, "\n"]) == ["x::1"]


def test_output_does_not_depend_on_chunk_boundaries():
    expected = _expected_lines(RESPONSE)
    positions = range(1, len(RESPONSE))
    for count in (1, 2, 3):
        for cuts in combinations(positions, count):
            assert _tokenize(_split(RESPONSE, cuts)) == expected, cuts


def test_single_character_fragments():
    assert _tokenize(list(RESPONSE)) == _expected_lines(RESPONSE)


def test_iter_lines_over_async_source():
    async def fragments():
        for part in ("firstName::A", "nn\nskills::SQL\n", "lastName::Lee"):
            yield part

    async def collect():
        return [line async for line in iter_lines(fragments())]

    assert asyncio.run(collect()) == ["firstName::Ann", "skills::SQL", "lastName::Lee"]
