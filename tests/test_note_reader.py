from DrExtract.note_reader import NoteFileReader
from DrExtract.settings import DEFAULT_NOTE_PATH, DEFAULT_NOTE_TEXT


def test_reads_existing_file(tmp_path):
    note_file = tmp_path / "note.txt"
    note_file.write_text("Wheelchair. Ordered by Dr. Who.", encoding="utf-8")
    assert NoteFileReader(note_file).read() == "Wheelchair. Ordered by Dr. Who."


def test_missing_file_returns_default_fallback(tmp_path):
    assert NoteFileReader(tmp_path / "missing.txt").read() == DEFAULT_NOTE_TEXT


def test_missing_file_returns_configured_fallback(tmp_path):
    reader = NoteFileReader(tmp_path / "missing.txt", fallback_text="Oxygen 2L.")
    assert reader.read() == "Oxygen 2L."


def test_undecodable_file_returns_fallback(tmp_path):
    note_file = tmp_path / "binary.txt"
    note_file.write_bytes(b"\xff\xfe\xfa not utf-8")
    assert NoteFileReader(note_file, fallback_text="fallback").read() == "fallback"


def test_blank_path_uses_default_location():
    assert str(NoteFileReader("  ").path) == DEFAULT_NOTE_PATH
    assert str(NoteFileReader().path) == DEFAULT_NOTE_PATH
