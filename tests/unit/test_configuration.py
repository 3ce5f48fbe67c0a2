# Tests for registry parameters and logging

import logging

import pytest

from backforge.configuration import ColoredFormatter, RegistryLogger, RegistryParams


def test_registry_params_defaults():
    params = RegistryParams()
    assert params.to_dict() == {'verbose': False, 'base_name_only': 1, 'unique_aliases': 'global'}


def test_registry_params_invalid_depth():
    with pytest.raises(ValueError, match='base_name_only'):
        RegistryParams(base_name_only=-1)
    with pytest.raises(ValueError, match='base_name_only'):
        RegistryParams(base_name_only='1')


def test_registry_params_invalid_policy():
    with pytest.raises(ValueError, match='unique_aliases'):
        RegistryParams(unique_aliases='everywhere')


def test_logger_writes_file(tmp_path):
    log_file = tmp_path / 'registry.log'
    logger = RegistryLogger(name='backforge-test-file', log_file=str(log_file), console_level='ERROR')

    logger.log('info', '[REGISTRY]', 'Registered item: Cache/Redis')
    logger.log('debug', '[REGISTRY]', 'Created RedisCacheBackend')
    logger.close()

    content = log_file.read_text()
    assert '[REGISTRY]' in content
    assert 'Registered item: Cache/Redis' in content
    assert 'Created RedisCacheBackend' in content


def test_logger_console_level(capsys):
    logger = RegistryLogger(name='backforge-test-console', console_level='WARNING', use_colors=False)

    logger.log('info', '[REGISTRY]', 'hidden')
    logger.log('warning', '[REGISTRY]', 'shown')

    out = capsys.readouterr().out
    assert 'hidden' not in out
    assert 'shown' in out


def test_logger_replaces_handlers(tmp_path):
    first = tmp_path / 'first.log'
    second = tmp_path / 'second.log'
    RegistryLogger(name='backforge-test-reuse', log_file=str(first), console_level='ERROR')
    logger = RegistryLogger(name='backforge-test-reuse', log_file=str(second), console_level='ERROR')

    logger.log('info', '[SCHEMA]', 'moved')

    assert 'moved' not in first.read_text()
    assert 'moved' in second.read_text()
    file_handlers = [h for h in logger.logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    logger.close()
    assert logger.logger.handlers == []


def test_colored_formatter():
    formatter = ColoredFormatter(fmt=RegistryLogger.FORMAT)
    record = logging.LogRecord('test', logging.WARNING, __file__, 1, 'careful', None, None)
    record.method = '[REGISTRY]'

    formatted = formatter.format(record)

    assert formatted.startswith(ColoredFormatter.LEVEL_STYLES['WARNING'][1])
    assert formatted.endswith(ColoredFormatter.RESET)
    assert 'WARN' in formatted
    assert record.levelname == 'WARNING'
