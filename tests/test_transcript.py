from speech_splitter.transcript import count_sentences, parse_transcript


def test_numbered_transcript_yields_one_entry_per_number():
    text = (
        "1. El gato es muy grande.\n\n"
        "2. ¿Dónde está el perro? Está en la casa.\n\n"
        "3. Hola!\n"
    )

    sentences = parse_transcript(text)

    assert sentences == [
        "El gato es muy grande.",
        "¿Dónde está el perro? Está en la casa.",
        "Hola!",
    ]


def test_numbered_entry_can_wrap_onto_next_line():
    text = "1. A long sentence that\nwraps around.\n2. Short one."

    assert parse_transcript(text) == ["A long sentence that wraps around.", "Short one."]


def test_plain_text_splits_on_sentence_punctuation():
    text = "The cat sleeps. The dog barks!\nWhere is the bird?"

    assert parse_transcript(text) == ["The cat sleeps.", "The dog barks!", "Where is the bird?"]


def test_cjk_punctuation_without_spaces():
    text = "我喜欢猫。你呢？很好！"

    assert parse_transcript(text) == ["我喜欢猫。", "你呢？", "很好！"]


def test_windows_line_endings():
    text = "1. One.\r\n\r\n2. Two.\r\n"

    assert parse_transcript(text) == ["One.", "Two."]


def test_empty_transcript():
    assert parse_transcript("") == []
    assert parse_transcript("   \n ") == []
    assert count_sentences("First. Second.") == 2
