import re

import pytest

from clipnote.llms.llm_gateway import GenerationResult
from clipnote.models.enums import LanguageCode
from clipnote.models.models import TranscriptSegment
from clipnote.services.video_pipeline.quick_start import (
    QuickStartOrchestrator,
    QuickStartQuestions,
    build_quick_start_prompt,
    truncate_words,
)
from clipnote.i18n.prompts import get_quick_start_prompt


class FakeGateway:
    quick_start_model = "gpt-5-nano"

    def __init__(self, questions=None, parsed=None):
        self.prompts = []
        self.calls = []
        self._parsed = parsed if parsed is not None else QuickStartQuestions(questions=questions or [])

    def generate_structured(self, prompt, schema, model_name=None, temperature=1.0):
        self.prompts.append(prompt)
        self.calls.append({"schema": schema, "model_name": model_name, "temperature": temperature})
        return GenerationResult(parsed=self._parsed, raw=None, model_name=model_name, provider="openai")


class RecordingSink:
    def __init__(self, error=None):
        self.error = error
        self.tracked = []

    def track(self, result, context):
        if self.error:
            raise self.error
        self.tracked.append((result, context))


class RecordingUserVideoRepo:
    def __init__(self):
        self.updates = []

    def update_quick_start_questions(self, user_video_id, questions):
        self.updates.append((user_video_id, list(questions)))


class FixedLanguage:
    def __init__(self, language=LanguageCode.EN):
        self.language = language

    def resolve(self, user_id=None):
        return self.language


def _segments(word_count, words_per_segment=50):
    words = [f"w{i}" for i in range(word_count)]
    return [
        TranscriptSegment(start="00:00:00", end="00:00:01", text=" ".join(words[i:i + words_per_segment]))
        for i in range(0, word_count, words_per_segment)
    ]


def _transcript_body(prompt):
    match = re.search(r"<transcript>\n(.*)\n</transcript>", prompt, flags=re.DOTALL)
    assert match, prompt
    return match.group(1)


def _orchestrator(gateway=None, sink=None, repo=None, language=LanguageCode.EN, current_user=lambda: "user-1"):
    return QuickStartOrchestrator(
        gateway=gateway or FakeGateway(questions=["Q1?"]),
        usage_sink=sink or RecordingSink(),
        user_video_repo=repo or RecordingUserVideoRepo(),
        language_resolver=FixedLanguage(language),
        current_user=current_user,
    )


@pytest.mark.unit
@pytest.mark.parametrize("word_count,expected", [(100, 100), (6000, 6000), (10000, 6000)])
def test_prompt_never_carries_more_than_6000_words(word_count, expected):
    gateway = FakeGateway(questions=["Q?"])
    _orchestrator(gateway=gateway).generate_questions(_segments(word_count))

    body = _transcript_body(gateway.prompts[0]).split()
    assert len(body) == expected
    assert body[0] == "w0"
    assert body[-1] == f"w{expected - 1}"


@pytest.mark.unit
def test_truncate_words_collapses_whitespace():
    assert truncate_words("  a \n b\t\tc  ", max_words=2) == "a b"


@pytest.mark.unit
def test_prompt_includes_only_present_metadata_lines():
    with_title = build_quick_start_prompt(LanguageCode.EN, "hello", video_title="Title")
    assert "Video Title: Title\n\nHere is the video transcript:" in with_title
    assert "Video Description" not in with_title

    bare = build_quick_start_prompt(LanguageCode.EN, "hello")
    assert bare == f"{get_quick_start_prompt(LanguageCode.EN)}\n\nHere is the video transcript:\n\n<transcript>\nhello\n</transcript>\n"


@pytest.mark.unit
def test_prompt_is_localized():
    gateway = FakeGateway(questions=["Apa?"])
    _orchestrator(gateway=gateway, language=LanguageCode.ID).generate_questions(_segments(10))
    assert gateway.prompts[0].startswith(get_quick_start_prompt(LanguageCode.ID))


@pytest.mark.unit
def test_generation_uses_fixed_temperature_and_schema():
    gateway = FakeGateway(questions=["Q?"])
    _orchestrator(gateway=gateway).generate_questions(_segments(10))
    assert gateway.calls[0]["temperature"] == 1.0
    assert gateway.calls[0]["schema"] is QuickStartQuestions
    assert gateway.calls[0]["model_name"] == "gpt-5-nano"


@pytest.mark.unit
def test_usage_failure_does_not_change_questions():
    questions = ["What is covered first?", "Why does it matter?"]
    repo = RecordingUserVideoRepo()
    orchestrator = _orchestrator(
        gateway=FakeGateway(questions=questions),
        sink=RecordingSink(error=RuntimeError("usage store down")),
        repo=repo,
    )
    assert orchestrator.generate_questions(_segments(20), user_video_id="uv-1") == questions
    assert repo.updates == [("uv-1", questions)]


@pytest.mark.unit
def test_missing_current_user_does_not_block_questions():
    def no_user():
        raise RuntimeError("no session")

    sink = RecordingSink()
    orchestrator = _orchestrator(gateway=FakeGateway(questions=["Q?"]), sink=sink, current_user=no_user)
    assert orchestrator.generate_questions(_segments(5)) == ["Q?"]
    assert sink.tracked == []


@pytest.mark.unit
def test_usage_context_carries_ids_and_operation():
    sink = RecordingSink()
    _orchestrator(sink=sink).generate_questions(_segments(5), user_video_id="uv-9", video_id="vid-9")

    (_, context), = sink.tracked
    assert context.user_id == "user-1"
    assert context.operation == "quick_start_questions"
    assert context.provider == "openai"
    assert context.model == "gpt-5-nano"
    assert context.video_id == "vid-9"
    assert context.user_video_id == "uv-9"
    assert context.request_duration_ms >= 0


@pytest.mark.unit
def test_empty_generation_returns_empty_list_without_persisting():
    repo = RecordingUserVideoRepo()
    orchestrator = _orchestrator(gateway=FakeGateway(questions=[]), repo=repo)
    assert orchestrator.generate_questions(_segments(5), user_video_id="uv-1") == []
    assert repo.updates == []


@pytest.mark.unit
def test_no_user_video_means_no_persistence():
    repo = RecordingUserVideoRepo()
    orchestrator = _orchestrator(gateway=FakeGateway(questions=["Q?"]), repo=repo)
    assert orchestrator.generate_questions(_segments(5)) == ["Q?"]
    assert repo.updates == []


@pytest.mark.unit
def test_unparsed_generation_is_treated_as_no_questions():
    gateway = FakeGateway()
    gateway._parsed = None
    assert _orchestrator(gateway=gateway).generate_questions(_segments(5)) == []
