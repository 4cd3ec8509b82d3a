import json

import pytest

from gsmconsole import status


def test_ok_write_detail():
    assert status.OK.write_detail("Nothing") == '{"code":0,"detail":"Nothing","message":"OK"}'


def test_write_detail_without_detail_omits_key():
    parsed = json.loads(status.OK.write_detail(None))
    assert parsed == {"code": 0, "message": "OK"}


def test_write_detail_empty_string_is_kept():
    parsed = json.loads(status.CLI_INSTALL_SYMLINK_SERVER_DELETED.write_detail(""))
    assert parsed["detail"] == ""
    assert parsed["code"] == 1014
    assert parsed["message"] == "The server for symlink is deleted"


def test_write_detail_with_mapping():
    detail = {"server_id": 7}
    parsed = json.loads(status.COORDINATOR_SERVER_OFFLINE.write_detail(detail))
    assert parsed == {"code": 200009, "message": "Server offline", "detail": {"server_id": 7}}


def test_registered_codes_have_messages():
    assert status.CLI_SENDING_COMMAND == 6001
    assert status.CLI_SENDING_COMMAND.message() == "Sending command"
    assert status.UNKNOWN_ERROR.message() == "Unknown Error"
    assert status.SERVER_CONNECTED_COORDINATOR_AND_LOGGING_IN.message() == (
        "Connected to the coordinator, logging in"
    )


def test_unknown_code_message():
    assert status.to_code(424242).message() == "Unknown Error code."


def test_to_code_round_trip():
    code = status.to_code(13001)
    assert int(code) == 13001
    assert code == status.CLI_COORDINATOR_SEND_STOP_SIGNAL
    assert code.message() == "Send stop signal"


def test_new_registers_and_rejects_duplicates():
    code = status.new(987654, "Registered in test")
    assert code.message() == "Registered in test"
    with pytest.raises(ValueError):
        status.new(987654, "Again")


def test_duplicate_builtin_rejected():
    with pytest.raises(ValueError):
        status.new(0, "Not OK")
    assert status.OK.message() == "OK"