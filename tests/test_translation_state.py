from utility.dto import Intensity, SessionUpdate
from utility.translation_state import (
    ErrorKind,
    Outcome,
    Phase,
    SessionState,
    begin_request,
    dismiss_error,
    render_view,
    resolve,
    update_fields,
)


def resolved_with_both():
    state = begin_request(SessionState(input_text="hi"))
    return resolve(state, Outcome.partial("hola (note)", ErrorKind.SPICE_UNAVAILABLE))


def test_defaults():
    state = SessionState()
    assert (state.source_language, state.target_language, state.intensity) == ("en", "es", Intensity.SPICY)
    assert state.phase == Phase.IDLE
    assert state.is_loading is False


def test_begin_request_clears_previous_cycle():
    state = begin_request(resolved_with_both())

    assert state.is_loading is True
    assert state.result_text == ""
    assert state.error_message == ""
    assert state.error_visible is False
    assert state.input_text == "hi"


def test_resolve_error_hides_result():
    state = resolve(begin_request(SessionState()), Outcome.failure(ErrorKind.TRANSLATION_UNAVAILABLE))

    assert state.phase == Phase.RESOLVED
    assert state.result_text == ""
    assert state.error_visible is True
    assert state.error_message == ErrorKind.TRANSLATION_UNAVAILABLE.message


def test_resolve_partial_sets_result_and_error_together():
    state = resolved_with_both()

    assert state.result_text == "hola (note)"
    assert state.error_visible is True
    assert state.error_message == ErrorKind.SPICE_UNAVAILABLE.message


def test_dismiss_error_keeps_message_and_result():
    state = dismiss_error(resolved_with_both())

    assert state.error_visible is False
    assert state.error_message == ErrorKind.SPICE_UNAVAILABLE.message
    assert state.result_text == "hola (note)"


def test_dismiss_error_is_idempotent():
    once = dismiss_error(resolved_with_both())
    twice = dismiss_error(once)

    assert twice == once
    assert twice is once


def test_update_fields_only_touches_given_fields():
    state = resolved_with_both()

    updated = update_fields(state, SessionUpdate(target_language="fr", intensity="extra-hot"))

    assert updated.target_language == "fr"
    assert updated.intensity == Intensity.EXTRA_HOT
    assert updated.input_text == "hi"
    assert updated.result_text == state.result_text
    assert updated.error_visible is True


def test_update_fields_noop():
    state = SessionState()
    assert update_fields(state, SessionUpdate()) is state


def test_render_idle_view():
    view = render_view(SessionState())

    assert view.title == "The Insulting Translator"
    assert view.submit_disabled is False
    assert view.submit_label == "Translate & Insult!"
    assert view.show_result is False
    assert view.show_error is False
    assert [lang.code for lang in view.languages][:3] == ["en", "es", "fr"]
    assert len(view.languages) == 12
    assert [i.value for i in view.intensities] == ["mild", "spicy", "extra-hot"]


def test_render_loading_view():
    view = render_view(begin_request(SessionState(input_text="hi")))

    assert view.is_loading is True
    assert view.submit_disabled is True
    assert view.submit_label == "Spicing it up..."
    assert view.phase == "loading"


def test_render_partial_view_shows_both_panels():
    view = render_view(resolved_with_both())

    assert view.show_result is True
    assert view.result_text == "hola (note)"
    assert view.show_error is True
    assert view.error_title == "Error!"
    assert view.dismiss_label == "Close"
