import datetime
import random

import pytest

from sudoku.common.constants import LOG_DIR_ENV_VAR, SAVE_DIR_ENV_VAR


# Keep the report of each phase on the test item
@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)


# Never touch the player's real save directory
@pytest.fixture(autouse=True)
def isolated_save_dir(tmp_path, monkeypatch):
    monkeypatch.setenv(SAVE_DIR_ENV_VAR, str(tmp_path / "saves"))
    monkeypatch.delenv(LOG_DIR_ENV_VAR, raising=False)
    random.seed(0)
    yield


# Real-time print of start and end of test
@pytest.fixture(autouse=True)
def log_test_lifecycle(request):
    node_id = request.node.nodeid
    start_time = datetime.datetime.now().strftime("%H:%M:%S")
    print(f"\n[START] {start_time} - Running: {node_id}")

    yield

    end_time = datetime.datetime.now().strftime("%H:%M:%S")
    report = getattr(request.node, "rep_call", None)
    status = report.outcome.upper() if report else "UNKNOWN"
    print(f"\n[END] {end_time} - Result: {status} - {node_id}")
