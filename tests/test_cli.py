"""
Tests for the command line front end
"""

import json
import logging

import pytest

from pyutquery.cli import main
from pyutquery.utils.logging_config import ModuleLogger


@pytest.fixture(autouse=True)
def restore_loggers():
    """configure_logging attaches handlers; drop them again after each test"""
    yield
    for name in ModuleLogger.MODULE_PREFIXES:
        logger = logging.getLogger(name)
        if name == 'pyutquery.cli':
            continue
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


class TestCli:
    """Test pyutquery console script"""

    def test_summary(self, fake_server, sample_replies, capsys):
        server = fake_server(sample_replies.values())
        assert main([server.address, "--timeout", "1"]) == 0

        out = capsys.readouterr().out
        assert "Arena" in out
        assert "3/16" in out
        assert "Malcolm" in out
        assert "GoalScore = 25" in out

    def test_json(self, fake_server, sample_replies, capsys):
        server = fake_server(sample_replies.values())
        assert main([server.address, "--json", "--timeout", "1"]) == 0

        data = json.loads(capsys.readouterr().out)
        result = data[server.address]
        assert result['success'] is True
        assert result['server']['map'] == "DM-Deck"
        assert len(result['server']['player_list']) == 3

    def test_failure_exit_code(self, fake_server, capsys):
        server = fake_server([])
        assert main([server.address, "--timeout", "0.2"]) == 1
        assert "query failed" in capsys.readouterr().out

    def test_invalid_timeout(self, capsys):
        assert main(["127.0.0.1:7778", "--timeout", "0"]) == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
