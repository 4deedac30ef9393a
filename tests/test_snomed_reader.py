from __future__ import annotations

import inspect
import os

from tqdm import tqdm

from INJECTABLES.server.utils.updater.snomed import (
    DescriptionRecord,
    SnomedDescriptionReader,
)
from tests.helpers import RF2_HEADER, description_line


def test_reader_skips_header_and_yields_records(write_release):
    path = write_release(
        "descriptions.txt",
        [
            description_line("Amoxicillin 500mg injection", concept_id="111"),
            description_line("Heparin sodium injection", concept_id="222"),
        ],
    )
    reader = SnomedDescriptionReader(path)
    records = list(reader.iter_records())
    assert [record.concept_id for record in records] == ["111", "222"]
    assert records[0] == DescriptionRecord(
        id="1000001",
        effective_time="20251219",
        active="1",
        module_id="1000189",
        concept_id="111",
        language_code="en",
        type_id="900000000000013009",
        term="Amoxicillin 500mg injection",
    )
    assert reader.lines_read == 2


def test_first_line_is_discarded_even_when_it_is_data(write_release):
    first = description_line("Ceftriaxone 1g injection", concept_id="999")
    path = write_release(
        "no_header.txt",
        [description_line("Heparin sodium injection", concept_id="222")],
        header=first,
    )
    records = list(SnomedDescriptionReader(path))
    assert [record.concept_id for record in records] == ["222"]


def test_short_lines_are_skipped_and_counted(write_release):
    path = write_release(
        "malformed.txt",
        [
            "only\tfour\tfields\there",
            "",
            description_line("Heparin sodium injection"),
        ],
    )
    reader = SnomedDescriptionReader(path)
    records = list(reader.iter_records())
    assert len(records) == 1
    assert reader.lines_read == 3
    assert reader.skipped_lines == 2


def test_crlf_line_endings_do_not_leak_into_terms(tmp_path):
    path = os.path.join(tmp_path, "windows.txt")
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write("id\teffectiveTime\tactive\tmoduleId\tconceptId\tlanguageCode\ttypeId\tterm\r\n")
        handle.write("1\t2025\t1\tm\t42\ten\tt\tLidocaine 2% injection\r\n")
    records = list(SnomedDescriptionReader(path))
    assert records[0].term == "Lidocaine 2% injection"


def test_extra_fields_are_ignored(write_release):
    path = write_release(
        "extra.txt",
        [description_line("Heparin sodium injection") + "\textra\tcolumns"],
    )
    record = next(iter(SnomedDescriptionReader(path)))
    assert record.term == "Heparin sodium injection"


def test_iteration_is_lazy_and_restartable(write_release):
    path = write_release(
        "lazy.txt",
        [description_line(f"Drug{i} 10mg injection", concept_id=str(i)) for i in range(5)],
    )
    reader = SnomedDescriptionReader(path)
    iterator = reader.iter_records()
    assert inspect.isgenerator(iterator)
    assert next(iterator).concept_id == "0"
    assert reader.lines_read == 1
    iterator.close()
    assert len(list(reader.iter_records())) == 5


def test_exists_reports_missing_file(tmp_path):
    reader = SnomedDescriptionReader(os.path.join(tmp_path, "missing.txt"))
    assert reader.exists() is False


def test_undecodable_bytes_do_not_abort_the_read(tmp_path):
    path = os.path.join(tmp_path, "latin.txt")
    lines = [
        RF2_HEADER,
        description_line("Amoxicillin 500mg injection", concept_id="111"),
        description_line("Bad TERM", concept_id="222"),
        description_line("Heparin sodium injection", concept_id="333"),
    ]
    payload = "\n".join(lines).encode("utf-8").replace(b"Bad TERM", b"Bad \xff\xfe term")
    with open(path, "wb") as handle:
        handle.write(payload + b"\n")

    reader = SnomedDescriptionReader(path)
    records = list(reader.iter_records())
    assert [record.concept_id for record in records] == ["111", "222", "333"]
    assert records[1].term == "Bad \ufffd\ufffd term"
    assert reader.lines_read == 3


def test_progress_bar_wraps_the_release_file(write_release, monkeypatch):
    calls = []

    def recording_tqdm(iterable, **kwargs):
        calls.append(kwargs)
        return tqdm(iterable, **kwargs)

    monkeypatch.setattr(
        "INJECTABLES.server.utils.updater.snomed.tqdm", recording_tqdm
    )
    path = write_release("progress.txt", [description_line("Heparin sodium injection")])
    records = list(SnomedDescriptionReader(path, progress_interval=50).iter_records())

    assert len(records) == 1
    assert calls[0]["desc"] == "progress.txt"
    assert calls[0]["miniters"] == 50
