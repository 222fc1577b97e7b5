"""
Unit tests for upstream payload construction.
"""
import pytest

from app.schemas.chat import ChatRequest
from app.services.request_builder import (
    build_completion_payload,
    clamp,
    parse_stop_sequences,
    summarize_payload,
)


def build(**fields):
    fields.setdefault("user_prompt", "Explain gravity")
    # model_construct skips validation, as a caller bypassing the validator would
    return build_completion_payload(ChatRequest.model_construct(**fields))


def test_defaults_are_applied():
    payload = build()
    assert payload == {
        "model": "gpt-3.5-turbo",
        "messages": [{"role": "user", "content": "Explain gravity"}],
        "temperature": 0.7,
        "max_tokens": 1000,
        "presence_penalty": 0.0,
        "frequency_penalty": 0.0,
    }


def test_explicit_zero_is_not_replaced_by_default():
    payload = build(temperature=0)
    assert payload["temperature"] == 0.0


def test_system_message_precedes_trimmed_user_message():
    payload = build(system_prompt="  Be brief.  ", user_prompt="  Explain gravity \n")
    assert payload["messages"] == [
        {"role": "system", "content": "Be brief."},
        {"role": "user", "content": "Explain gravity"},
    ]


def test_blank_system_prompt_is_dropped():
    payload = build(system_prompt="   ")
    assert [m["role"] for m in payload["messages"]] == ["user"]


@pytest.mark.parametrize("value,expected", [(5, 2.0), (-1, 0.0), (1.3, 1.3)])
def test_temperature_is_clamped(value, expected):
    assert build(temperature=value)["temperature"] == expected


@pytest.mark.parametrize("value,expected", [(0, 1), (999999, 4000), (-20, 1), (512, 512)])
def test_max_tokens_is_clamped(value, expected):
    assert build(max_tokens=value)["max_tokens"] == expected


def test_penalties_are_clamped():
    payload = build(presence_penalty=-2, frequency_penalty=3.5)
    assert payload["presence_penalty"] == 0.0
    assert payload["frequency_penalty"] == 2.0


def test_model_is_passed_through():
    assert build(model="gpt-4")["model"] == "gpt-4"


def test_stop_sequences_keep_first_four_non_empty():
    assert build(stop_sequence="a,,b,c,d,e")["stop"] == ["a", "b", "c", "d"]


def test_empty_stop_list_omits_field():
    assert "stop" not in build(stop_sequence=",, ,")
    assert "stop" not in build(stop_sequence="")
    assert "stop" not in build()


def test_parse_stop_sequences_drops_long_entries():
    long_entry = "x" * 101
    assert parse_stop_sequences(f" END ,{long_entry}, {'y' * 100}") == ["END", "y" * 100]


def test_clamp():
    assert clamp(3, 0, 2) == 2
    assert clamp(-3, 0, 2) == 0
    assert clamp(1, 0, 2) == 1


def test_summary_has_no_prompt_text():
    payload = build(system_prompt="secret system", stop_sequence="END")
    summary = summarize_payload(payload)
    assert summary["messages_count"] == 2
    assert summary["stop"] == ["END"]
    assert "secret system" not in str(summary)
    assert "Explain gravity" not in str(summary)
