import json

import pytest

from mandelbrot_explorer.errors import DeserializationFailure, ExplorerError, IOFailure
from mandelbrot_explorer.snapshot import SNAPSHOT_FORMAT, SNAPSHOT_VERSION, dumps_view, load_view, loads_view, save_view
from mandelbrot_explorer.state import ViewState

VIEW = ViewState(-0.75, -0.74, 0.1, 0.11, "Brown", 450)


def _payload(**overrides):
    payload = json.loads(dumps_view(VIEW))
    payload.update(overrides)
    return payload


def test_document_records_every_field():
    payload = json.loads(dumps_view(VIEW))
    assert payload == {
        "format": SNAPSHOT_FORMAT,
        "version": SNAPSHOT_VERSION,
        "min_real": -0.75,
        "max_real": -0.74,
        "min_imag": 0.1,
        "max_imag": 0.11,
        "palette": "Brown",
        "max_iterations": 450,
    }


def test_loads_restores_an_equal_state():
    assert loads_view(dumps_view(VIEW)) == VIEW


def test_integral_bounds_are_accepted_as_floats():
    view = loads_view(json.dumps(_payload(min_real=-2, max_real=1)))
    assert view.min_real == -2.0
    assert isinstance(view.min_real, float)


def test_unknown_palette_is_kept():
    assert loads_view(json.dumps(_payload(palette="Sepia"))).palette == "Sepia"


def test_caps_beyond_32_bits_are_accepted():
    assert loads_view(json.dumps(_payload(max_iterations=2 ** 40))).max_iterations == 2 ** 40


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[1, 2, 3]",
        json.dumps(_payload(format="other")),
        json.dumps(_payload(version=99)),
        json.dumps(_payload(min_real="-2")),
        json.dumps(_payload(max_iterations=0)),
        json.dumps(_payload(max_iterations=12.5)),
        json.dumps(_payload(max_iterations=True)),
        json.dumps(_payload(palette=3)),
        json.dumps(_payload(min_real=1.0, max_real=-1.0)),
        json.dumps(_payload(min_imag=0.5, max_imag=0.5)),
        json.dumps(_payload(max_real=10 ** 400)),
        json.dumps(_payload(max_iterations=2 ** 63)),
    ],
)
def test_malformed_documents_are_rejected(text):
    with pytest.raises(DeserializationFailure):
        loads_view(text)


def test_missing_field_is_named():
    payload = _payload()
    del payload["max_imag"]
    with pytest.raises(DeserializationFailure, match="max_imag"):
        loads_view(json.dumps(payload))


def test_save_and_load_file(tmp_path):
    path = save_view(VIEW, tmp_path / "nested" / "MSFile.json")
    assert path.is_file()
    assert load_view(path) == VIEW


def test_missing_file_is_an_io_failure(tmp_path):
    with pytest.raises(IOFailure):
        load_view(tmp_path / "absent.json")


def test_unwritable_location_is_an_io_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(IOFailure):
        save_view(VIEW, blocker / "state.json")


def test_binary_file_is_a_deserialization_failure(tmp_path):
    path = tmp_path / "state.json"
    path.write_bytes(b"\xff\xfe\x00\x81")
    with pytest.raises(DeserializationFailure):
        load_view(path)


def test_error_kinds_share_a_base():
    assert issubclass(IOFailure, ExplorerError)
    assert issubclass(DeserializationFailure, ExplorerError)
    assert not issubclass(IOFailure, DeserializationFailure)
