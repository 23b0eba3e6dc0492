from heirloom.services.formatters import format_event_sentence, infer_media_kind
from heirloom.services.gedcom_import.records import LifeEvent
from heirloom.services.placeholders import placeholder_portrait


def test_format_event_sentence_uses_type_and_year():
    assert format_event_sentence(LifeEvent(id="e", type="Birth", date="ABT 1890"), "Ann") == "Ann was born in 1890."
    assert format_event_sentence(LifeEvent(id="e", type="Burial"), "Ann") == "Ann was laid to rest."
    assert format_event_sentence(LifeEvent(id="e", type="Event", date="1901"), "Ann") == (
        "Ann recorded an event (event) in 1901."
    )


def test_format_event_sentence_names_spouse():
    married = LifeEvent(id="e", type="Marriage", date="1920", spouse_name="Bob")
    assert format_event_sentence(married, "Ann") == "Ann married Bob in 1920."
    assert format_event_sentence(LifeEvent(id="e", type="Marriage"), "Ann") == "Ann was married."


def test_infer_media_kind_prefers_mime_then_extension():
    assert infer_media_kind("scan", "image/jpeg") == "photo"
    assert infer_media_kind("interview.M4A") == "audio"
    assert infer_media_kind("wedding.mov", "") == "video"
    assert infer_media_kind("letter.pdf", "application/pdf") == "document"


def test_placeholder_portrait_keyed_by_gender():
    assert placeholder_portrait("female", base="/img/") == "/img/female.svg"
    assert placeholder_portrait("other", base="/img") == "/img/unknown.svg"
