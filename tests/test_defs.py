import json

import pytest

from maakit.defs import (
    AdbControllerType,
    CtrlOption,
    GlobalOption,
    Message,
    Status,
    default_adb_config,
    parse_adb_controller_type,
)


def test_status_values_fixed_by_format():
    assert Status.PENDING == 1000
    assert Status.SUCCESS == 3000
    assert Status.FAILED == 4000
    assert Status(0) is Status.INVALID


def test_options_values():
    assert GlobalOption(2) is GlobalOption.DEBUG_MODE
    assert GlobalOption(1) is GlobalOption.LOGGING
    assert CtrlOption(4) is CtrlOption.DEFAULT_APP_PACKAGE


def test_message_strings():
    assert Message.TASK_COMPLETED == "Task.Completed"
    assert str(Message.CONTROLLER_TOUCH_INPUT_INITED) == "Controller.TouchinputInited"
    assert Message("Resource.StartLoading") is Message.RESOURCE_START_LOADING


def test_presets_are_unions():
    assert parse_adb_controller_type(["touch.adb", "key.adb"]) == (
        AdbControllerType.INPUT_PRESET_ADB
    )
    assert parse_adb_controller_type(["touch.maatouch", "key.maatouch"]) == (
        AdbControllerType.INPUT_PRESET_MAATOUCH
    )


@pytest.mark.parametrize(
    "member, mask",
    [
        (AdbControllerType.TOUCH_MINITOUCH, AdbControllerType.TOUCH_MASK),
        (AdbControllerType.KEY_MAATOUCH, AdbControllerType.KEY_MASK),
        (AdbControllerType.SCREENCAP_MINICAP_STREAM, AdbControllerType.SCREENCAP_MASK),
        (AdbControllerType.SCREENCAP_ENCODE, AdbControllerType.SCREENCAP_MASK),
    ],
)
def test_members_lie_within_their_mask(member, mask):
    assert int(member) & int(mask) == int(member)
    other_masks = {
        AdbControllerType.TOUCH_MASK,
        AdbControllerType.KEY_MASK,
        AdbControllerType.SCREENCAP_MASK,
    } - {mask}
    for other in other_masks:
        assert int(member) & int(other) == 0


def test_parse_combines_names():
    result = parse_adb_controller_type(["touch.adb", "key.adb"])
    assert result == AdbControllerType.INPUT_PRESET_ADB


def test_parse_full_selection():
    result = parse_adb_controller_type(["touch.maatouch", "key.maatouch", "screencap.encode"])
    assert int(result) & int(AdbControllerType.SCREENCAP_MASK) == int(
        AdbControllerType.SCREENCAP_ENCODE
    )
    assert int(result) & int(AdbControllerType.TOUCH_MASK) == int(
        AdbControllerType.TOUCH_MAATOUCH
    )


def test_parse_empty_is_invalid():
    assert parse_adb_controller_type([]) == AdbControllerType.INVALID


def test_parse_unknown_name_raises():
    with pytest.raises(ValueError):
        parse_adb_controller_type(["touch.adb", "touch.bogus"])


def test_default_config_click_argv():
    config = default_adb_config()
    assert config["argv"]["Click"] == ["{ADB}", "-s", "{ADB_SERIAL}", "shell", "input tap {X} {Y}"]
    assert config["argv"]["KillServer"] == ["{ADB}", "kill-server"]
    assert config["prebuilt"]["maatouch"]["package"] == "com.shxyke.MaaTouch.App"


def test_default_config_is_json_serialisable():
    config = default_adb_config()
    assert json.loads(json.dumps(config)) == config


def test_default_config_returns_independent_copies():
    first = default_adb_config()
    first["argv"]["Click"].append("extra")
    first["prebuilt"].clear()
    second = default_adb_config()
    assert second["argv"]["Click"][-1] == "input tap {X} {Y}"
    assert "minicap" in second["prebuilt"]