import pytest

from guidance_templates import (
    Category,
    RESPONSE_FORMAT,
    classify_feeling,
    get_all_categories,
    parse_category,
    select_prompt_template,
)


@pytest.mark.parametrize(
    "feeling",
    ["I am SAD today", "feeling Anxious about exams", "so STRESSED", "I feel lost"],
)
def test_difficulty_keywords_match_in_any_case(feeling):
    assert classify_feeling(feeling) == Category.DIFFICULTY


def test_difficulty_wins_over_gratitude_and_growth():
    feeling = "grateful for my family, trying to grow, but worried about work"
    assert classify_feeling(feeling) == Category.DIFFICULTY


def test_gratitude_wins_over_growth():
    assert classify_feeling("Thankful and want to learn more Gurbani") == Category.GRATITUDE


def test_growth_keywords():
    assert classify_feeling("I want to meditate more and progress spiritually") == Category.GROWTH


@pytest.mark.parametrize("feeling", ["", "   ", "an ordinary Tuesday"])
def test_no_keyword_is_standard(feeling):
    assert classify_feeling(feeling) == Category.STANDARD


def test_prompt_embeds_feeling_verbatim():
    feeling = 'I feel {anxious} about "tomorrow"'
    selection = select_prompt_template(feeling)
    assert selection.category == Category.DIFFICULTY
    assert feeling in selection.prompt
    assert "resilience" in selection.prompt


def test_every_prompt_carries_response_format():
    for name in get_all_categories():
        selection = select_prompt_template("hello", Category(name))
        assert RESPONSE_FORMAT in selection.prompt
        assert '"gurbaniTuk"' in selection.prompt


def test_standard_prompt_has_no_extra_action_line():
    prompt = select_prompt_template("an ordinary day").prompt
    assert "Include actions" not in prompt
    assert "suggested Ardaas" in prompt


def test_explicit_category_overrides_classifier():
    selection = select_prompt_template("I am so sad", Category.GRATITUDE)
    assert selection.category == Category.GRATITUDE
    assert "thankfulness" in selection.prompt


def test_selection_is_deterministic():
    assert select_prompt_template("happy day") == select_prompt_template("happy day")


def test_parse_category():
    assert parse_category("Growth") == Category.GROWTH
    assert parse_category(" difficulty ") == Category.DIFFICULTY
    assert parse_category("joy") is None
    assert parse_category(None) is None
    assert parse_category("") is None


def test_get_all_categories():
    assert get_all_categories() == ["difficulty", "gratitude", "growth", "standard"]
