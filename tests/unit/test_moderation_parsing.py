from app.services.moderation import (
    ModerationVerdict,
    build_moderation_prompt,
    parse_moderation_response,
)


def test_safe_reply():
    result = parse_moderation_response('{"isSafe": true, "flags": []}')
    assert result.verdict is ModerationVerdict.SAFE
    assert result.flags == []
    assert not result.is_flagged


def test_unsafe_reply_keeps_flag_order():
    result = parse_moderation_response('{"isSafe": false, "flags": ["spam", "profanity"]}')
    assert result.verdict is ModerationVerdict.UNSAFE
    assert result.flags == ["spam", "profanity"]
    assert result.is_flagged


def test_unsafe_without_flags_counts_as_safe():
    result = parse_moderation_response('{"isSafe": false, "flags": []}')
    assert result.verdict is ModerationVerdict.SAFE

    result = parse_moderation_response('{"isSafe": false}')
    assert result.verdict is ModerationVerdict.SAFE


def test_flags_without_a_truthy_is_safe_are_unsafe():
    result = parse_moderation_response('{"flags": ["spam"]}')
    assert result.verdict is ModerationVerdict.UNSAFE
    assert result.flags == ["spam"]

    result = parse_moderation_response('{"isSafe": null, "flags": ["spam"]}')
    assert result.verdict is ModerationVerdict.UNSAFE
    assert result.flags == ["spam"]


def test_flags_on_safe_reply_are_ignored():
    result = parse_moderation_response('{"isSafe": true, "flags": ["spam"]}')
    assert result.verdict is ModerationVerdict.SAFE
    assert result.flags == []


def test_non_json_reply_is_unparseable():
    result = parse_moderation_response("The review looks fine to me.")
    assert result.verdict is ModerationVerdict.UNPARSEABLE
    assert result.raw == "The review looks fine to me."
    assert not result.is_flagged


def test_json_that_is_not_an_object_is_unparseable():
    assert parse_moderation_response("[1, 2]").verdict is ModerationVerdict.UNPARSEABLE
    assert parse_moderation_response('"safe"').verdict is ModerationVerdict.UNPARSEABLE
    assert parse_moderation_response(None).verdict is ModerationVerdict.UNPARSEABLE
    assert parse_moderation_response("").verdict is ModerationVerdict.UNPARSEABLE


def test_code_fenced_reply_is_unwrapped():
    reply = '```json\n{"isSafe": false, "flags": ["personal attack"]}\n```'
    result = parse_moderation_response(reply)
    assert result.verdict is ModerationVerdict.UNSAFE
    assert result.flags == ["personal attack"]


def test_non_string_flags_are_stringified():
    result = parse_moderation_response('{"isSafe": false, "flags": [404]}')
    assert result.flags == ["404"]


def test_prompt_carries_review_and_history():
    prompt = build_moderation_prompt("Terrible, never again!!", total_reviews=7, flagged_reviews=2)
    assert 'Review text: "Terrible, never again!!"' in prompt
    assert "User history: 7 total reviews, 2 previously flagged" in prompt
    assert "No spam or promotional content" in prompt
    assert "Respond ONLY with valid JSON" in prompt
