#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging

import pytest

from http_promise.common import config


@pytest.fixture(autouse=True)
def config_file(tmpdir, monkeypatch):
    """Use a temporary config file, and start each test with no value set."""
    path = str(tmpdir.join('http_promise.ini'))
    monkeypatch.setattr(config, '_get_config_file_path', lambda: path)
    config.reset()
    yield path
    config.reset()


class TestConfigLoad(object):

    def test_load_without_existing_file(self, caplog):
        with caplog.at_level(logging.WARNING):
            config.load()
        assert 'Unable to load config file' in caplog.text

    def test_load_with_existing_file(self, config_file, caplog):
        with open(config_file, 'w') as f:
            f.write('[config]\nmax_workers = 4\n')

        with caplog.at_level(logging.WARNING):
            config.load()
        assert caplog.records == []
        assert config.get('max_workers') == 4


class TestConfigGet(object):

    def test_key_does_not_exist(self):
        with pytest.raises(KeyError):
            config.get('plop')

    def test_default_values(self):
        assert config.get('debug_mode') is False
        assert config.get('max_workers') == 10
        assert config.get('max_retry') == 3
        assert config.get('timeout') == 30
        assert config.get('raise_for_status') is True
        assert config.get('proxies') == {}
        assert config.get('log_levels') == {}

    def test_get_a_bool_value(self):
        config.set('debug_mode', True)
        assert config.get('debug_mode') is True

    def test_get_a_bool_with_invalid_value(self):
        config.set('debug_mode', 'plop')
        assert config.get('debug_mode') is False

    def test_get_an_int_with_invalid_value(self):
        config.set('timeout', 'plop')
        assert config.get('timeout') == 30

    def test_get_a_dict(self):
        config.set('proxies', 'http=http://proxy:3128;https=socks5://h:1080')
        assert config.get('proxies') == {'http': 'http://proxy:3128',
                                         'https': 'socks5://h:1080'}

    def test_get_a_dict_with_invalid_value(self):
        config.set('log_levels', 'http_promise=debug;invalid')
        assert config.get('log_levels') == {'http_promise': 'debug'}


class TestConfigSet(object):

    def test_set_a_not_existing_key(self):
        with pytest.raises(KeyError):
            config.set('plop', 42)

    def test_set_write_the_file(self, config_file):
        config.set('max_workers', 3)
        config.reset()
        assert config.get('max_workers') == 10

        config.load()
        assert config.get('max_workers') == 3

    def test_set_a_dict(self):
        config.set('log_levels', {'http_promise': 'INFO'})
        assert config.get('log_levels') == {'http_promise': 'INFO'}
