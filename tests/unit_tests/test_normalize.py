"""
Error normalization tests. normalize_error must return a string for any input.
"""

from __future__ import annotations

import errno

import orjson

from syslogger.normalize import UNSERIALIZABLE_ERROR, normalize_error


class CodedError(Exception):
    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.code = code


class BrokenStrError(Exception):
    def __str__(self) -> str:
        raise RuntimeError("no string for you")


class BrokenEverythingError(Exception):
    def __str__(self) -> str:
        raise RuntimeError("no string")

    @property
    def args(self):
        raise RuntimeError("no args")

    @args.setter
    def args(self, value) -> None:
        pass


def _raised(exc: BaseException) -> BaseException:
    try:
        raise exc
    except BaseException as caught:
        return caught


class TestNormalizeError:
    """Exception serialization"""

    def test_message_and_name(self) -> None:
        payload = orjson.loads(normalize_error(RuntimeError("durp")))
        assert payload["name"] == "RuntimeError"
        assert payload["message"] == "durp"
        assert "stack" not in payload

    def test_custom_attributes_are_kept(self) -> None:
        payload = orjson.loads(normalize_error(CodedError("denied", code="E_ACCESS")))
        assert payload["code"] == "E_ACCESS"

    def test_os_error_fields_are_kept(self) -> None:
        err = FileNotFoundError(errno.ENOENT, "No such file", "/etc/x")
        payload = orjson.loads(normalize_error(err))
        assert payload["errno"] == errno.ENOENT
        assert payload["strerror"] == "No such file"
        assert payload["filename"] == "/etc/x"
        assert payload["args"] == [errno.ENOENT, "No such file"]
        assert "filename2" not in payload
        assert "characters_written" not in payload

    def test_unicode_error_fields_are_kept(self) -> None:
        err = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        payload = orjson.loads(normalize_error(err))
        assert payload["encoding"] == "utf-8"
        assert payload["reason"] == "invalid start byte"
        assert (payload["start"], payload["end"]) == (0, 1)

    def test_single_message_has_no_args(self) -> None:
        payload = orjson.loads(normalize_error(RuntimeError("durp")))
        assert "args" not in payload

    def test_key_order(self) -> None:
        err = _raised(CodedError("denied", code="E_ACCESS"))
        err.add_note("while loading config")
        payload = orjson.loads(normalize_error(err))
        assert list(payload) == ["name", "message", "stack", "notes", "code"]

    def test_raised_error_has_stack(self) -> None:
        payload = orjson.loads(normalize_error(_raised(ValueError("bad value"))))
        assert "Traceback" in payload["stack"]
        assert "ValueError: bad value" in payload["stack"]

    def test_cause_is_normalized(self) -> None:
        try:
            try:
                raise KeyError("inner")
            except KeyError as inner:
                raise RuntimeError("outer") from inner
        except RuntimeError as outer:
            payload = orjson.loads(normalize_error(outer))
        assert payload["cause"]["name"] == "KeyError"

    def test_circular_cause_terminates(self) -> None:
        first = RuntimeError("first")
        second = RuntimeError("second")
        first.__cause__ = second
        second.__cause__ = first
        payload = orjson.loads(normalize_error(first))
        assert payload["cause"]["cause"] == "<circular reference>"

    def test_string_passes_through(self) -> None:
        assert normalize_error("plain text") == "plain text"

    def test_non_error_values(self) -> None:
        assert normalize_error({"code": 1}) == '{"code":1}'
        assert normalize_error(None) == "null"


class TestNormalizeFallbacks:
    """Normalization never raises"""

    def test_circular_attribute(self) -> None:
        err = CodedError("loop", code="E_LOOP")
        err.context = {}
        err.context["self"] = err.context
        result = normalize_error(err)
        assert isinstance(result, str)
        assert "loop" in result

    def test_self_referencing_error(self) -> None:
        err = RuntimeError("me")
        err.me = err
        result = normalize_error(err)
        assert isinstance(result, str)
        assert "me" in result

    def test_broken_str_falls_back_to_args(self) -> None:
        result = normalize_error(BrokenStrError("hidden message"))
        assert "hidden message" in result

    def test_nothing_obtainable_yields_sentinel(self) -> None:
        assert normalize_error(BrokenEverythingError()) == UNSERIALIZABLE_ERROR

    def test_circular_non_error_value(self) -> None:
        data: dict = {}
        data["self"] = data
        assert isinstance(normalize_error(data), str)
