"""
Unit tests for the plan chain: prompt building, output parsing, and generate_plan with a mocked LLM.
"""

from datetime import date
from unittest.mock import patch

import pytest

from app.agent.planner import PLAN_ABILITIES, build_plan_prompt, generate_plan, parse_plan
from app.agent.prompts import OBJECTIVE, format_today, system_prompt
from app.core.errors import PlanParseError


class TestParsePlan:
    """Tests for parse_plan()."""

    def test_fenced_json(self) -> None:
        text = 'Here you go:\n```json\n{"steps": ["search_internet(...)", "send_tweet(...)"]}\n```'
        assert parse_plan(text).steps == ["search_internet(...)", "send_tweet(...)"]

    def test_fence_without_language_tag(self) -> None:
        text = '```\n{"steps": ["one"]}\n```'
        assert parse_plan(text).steps == ["one"]

    def test_bare_json_with_surrounding_text(self) -> None:
        text = 'Plan: {"steps": ["a", "b", "c"]} end'
        assert parse_plan(text).steps == ["a", "b", "c"]

    def test_order_is_preserved(self) -> None:
        steps = [f"step {i}" for i in range(10)]
        text = '{"steps": [' + ", ".join(f'"{s}"' for s in steps) + "]}"
        assert parse_plan(text).steps == steps

    def test_no_json_raises(self) -> None:
        with pytest.raises(PlanParseError):
            parse_plan("I cannot help with that.")

    def test_empty_raises(self) -> None:
        with pytest.raises(PlanParseError):
            parse_plan("")

    def test_wrong_shape_raises(self) -> None:
        with pytest.raises(PlanParseError) as exc:
            parse_plan('{"plan": ["a"]}')
        assert exc.value.raw == '{"plan": ["a"]}'

    def test_steps_must_be_strings(self) -> None:
        with pytest.raises(PlanParseError):
            parse_plan('{"steps": [{"ability": "search_internet"}]}')


class TestPrompts:
    def test_plan_prompt_contains_objective_abilities_and_schema(self) -> None:
        prompt = build_plan_prompt()
        assert OBJECTIVE in prompt
        assert "search_internet(query)\nsend_tweet(text)" in prompt
        assert '"steps"' in prompt
        assert "```json" in prompt
        assert prompt.rstrip().endswith("### Your Plan:")

    def test_plan_prompt_custom_abilities(self) -> None:
        prompt = build_plan_prompt("Do X", ["create_video(script)"])
        assert "### Objective\nDo X" in prompt
        assert "create_video(script)" in prompt
        assert "send_tweet(text)" not in prompt

    @pytest.mark.parametrize(
        "day,expected",
        [
            (date(2024, 12, 1), "1st of December 2024"),
            (date(2024, 12, 2), "2nd of December 2024"),
            (date(2024, 12, 3), "3rd of December 2024"),
            (date(2024, 12, 11), "11th of December 2024"),
            (date(2024, 12, 12), "12th of December 2024"),
            (date(2024, 12, 13), "13th of December 2024"),
            (date(2024, 12, 17), "17th of December 2024"),
            (date(2024, 12, 22), "22nd of December 2024"),
        ],
    )
    def test_format_today(self, day: date, expected: str) -> None:
        assert format_today(day) == expected

    def test_system_prompt_has_date(self) -> None:
        assert "Today's date: 17th of December 2024" in system_prompt(date(2024, 12, 17))


def test_generate_plan_parses_model_output() -> None:
    reply = '```json\n{"steps": ["search_internet(query=\\"ucl winner\\")", "send_tweet(text=...)"]}\n```'
    with patch("app.agent.planner.complete", return_value=reply) as mock_complete:
        plan = generate_plan()
    assert plan.steps == ['search_internet(query="ucl winner")', "send_tweet(text=...)"]
    prompt = mock_complete.call_args.args[0]
    assert OBJECTIVE in prompt
    assert all(a in prompt for a in PLAN_ABILITIES)
    assert mock_complete.call_args.kwargs["temperature"] == 0.2


def test_generate_plan_propagates_parse_failure() -> None:
    with patch("app.agent.planner.complete", return_value="no plan here"):
        with pytest.raises(PlanParseError):
            generate_plan()
