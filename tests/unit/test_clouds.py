#
# Copyright 2019 FMR LLC <opensource@fidelity.com>
#
# SPDX-License-Identifier: MIT
#

# pylint: disable=redefined-outer-name,missing-docstring

import logging
from pathlib import Path

import pytest
from requests.exceptions import MissingSchema

from osauth import clouds
from osauth.errors import InvalidConfig, OSAuthError
from osauth.identity import DEFAULT_DOMAIN, Name, ProjectScope

ALPHA = """
clouds:
  alpha:
    auth:
      auth_url: https://alpha.example.com/v3
      username: alice
      password: s3cret
"""

FULL = """
clouds:
  alpha:
    auth:
      auth_url: https://alpha.example.com/v3
      username: alice
      password: s3cret
      project_name: proj1
  beta:
    auth:
      auth_url: https://beta.example.com/v3
      username: bob
      password: hunter2
      project_name: proj2
      project_domain_name: pdomain
      user_domain_name: udomain
    region_name: RegionTwo
"""


def test_find_config_returns_none_when_nothing_exists():
    assert clouds.find_config() is None


def test_find_config_prefers_current_directory(locations):
    locations.write(locations.cwd, ALPHA)
    locations.write(locations.user, ALPHA)
    locations.write(locations.system, ALPHA)

    path = clouds.find_config()
    assert path == locations.cwd.resolve()
    assert path.is_absolute()


def test_find_config_falls_back_to_home(locations):
    locations.write(locations.user, ALPHA)
    locations.write(locations.system, ALPHA)
    assert clouds.find_config() == locations.user


def test_find_config_falls_back_to_system(locations):
    locations.write(locations.system, ALPHA)
    assert clouds.find_config() == locations.system


def test_find_config_ignores_directories(locations):
    locations.cwd.mkdir()
    locations.write(locations.system, ALPHA)
    assert clouds.find_config() == locations.system


def test_find_config_continues_when_canonicalize_fails(mocker, caplog, locations):
    locations.write(locations.user, ALPHA)
    current = mocker.patch.object(clouds, "CURRENT_CONFIG")
    current.is_file.return_value = True
    current.resolve.side_effect = OSError("boom")

    with caplog.at_level(logging.WARNING, logger="osauth.clouds"):
        assert clouds.find_config() == locations.user
    assert "Cannot canonicalize" in caplog.text


def test_find_config_continues_without_home(monkeypatch, caplog, locations):
    def no_home():
        raise RuntimeError("Could not determine home directory.")

    locations.write(locations.user, ALPHA)
    locations.write(locations.system, ALPHA)
    monkeypatch.setattr(Path, "home", no_home)

    with caplog.at_level(logging.WARNING, logger="osauth.clouds"):
        assert clouds.find_config() == locations.system
    assert "Cannot find home directory" in caplog.text


def test_load_clouds_reads_every_entry(locations):
    path = locations.write(locations.cwd, FULL)
    document = clouds.load_clouds(path)

    assert set(document.clouds) == {"alpha", "beta"}
    beta = document.clouds["beta"]
    assert beta.region_name == "RegionTwo"
    assert beta.auth.auth_url == "https://beta.example.com/v3"
    assert beta.auth.user_domain_name == "udomain"
    assert beta.auth.project_domain_name == "pdomain"

    alpha = document.clouds["alpha"]
    assert alpha.region_name is None
    assert alpha.auth.user_domain_name is None
    assert alpha.auth.project_domain_name is None


def test_load_clouds_ignores_unknown_keys(locations):
    path = locations.write(
        locations.cwd,
        """
        public-clouds: {}
        clouds:
          alpha:
            identity_api_version: 3
            auth:
              auth_url: https://alpha.example.com/v3
              username: alice
              password: s3cret
              application_credential_id: ignored
        """,
    )
    assert set(clouds.load_clouds(path).clouds) == {"alpha"}


def test_load_clouds_unreadable_file(locations):
    with pytest.raises(InvalidConfig, match="Cannot read clouds.yaml"):
        clouds.load_clouds(locations.cwd)


@pytest.mark.parametrize(
    "text",
    [
        "clouds: [unclosed",
        "",
        "- just\n- a list\n",
        "other: value\n",
        "clouds: not-a-mapping\n",
        "clouds:\n  alpha: not-a-mapping\n",
        "clouds:\n  alpha:\n    region_name: RegionOne\n",
        "clouds:\n  alpha:\n    auth:\n      username: a\n      password: b\n",
        "clouds:\n  alpha:\n    auth:\n      auth_url: https://x\n      password: b\n",
        "clouds:\n  alpha:\n    auth:\n      auth_url: https://x\n      username: a\n",
        "clouds:\n  alpha:\n    auth:\n      auth_url: https://x\n"
        "      username: a\n      password: b\n    region_name: [a, b]\n",
    ],
)
def test_load_clouds_invalid_content(locations, text):
    path = locations.write(locations.cwd, text)
    with pytest.raises(InvalidConfig, match="Cannot parse clouds.yaml"):
        clouds.load_clouds(path)


def test_load_clouds_reads_plain_scalars_as_text(locations):
    path = locations.write(
        locations.cwd,
        """
        clouds:
          alpha:
            auth:
              auth_url: https://alpha.example.com/v3
              username: 1001
              password: 12345678
              project_name: 2024
              user_domain_name: 1.5
              project_domain_name: true
            region_name: 7
        """,
    )
    alpha = clouds.load_clouds(path).clouds["alpha"]

    assert alpha.auth.username == "1001"
    assert alpha.auth.password == "12345678"
    assert alpha.auth.project_name == "2024"
    assert alpha.auth.user_domain_name == "1.5"
    assert alpha.auth.project_domain_name == "true"
    assert alpha.region_name == "7"


def test_from_config_numeric_password_and_project(locations):
    locations.write(
        locations.cwd,
        """
        clouds:
          alpha:
            auth:
              auth_url: https://alpha.example.com/v3
              username: alice
              password: 12345678
              project_name: 2024
        """,
    )
    identity = clouds.from_config("alpha").identity
    assert identity.password == "12345678"
    assert identity.scope == ProjectScope(Name("2024"), Name("Default"))


@pytest.mark.parametrize("text", ["clouds: {}\n", "clouds:\n"])
def test_from_config_empty_clouds_names_missing_cloud(locations, text):
    locations.write(locations.cwd, text)
    with pytest.raises(InvalidConfig, match="No such cloud: alpha"):
        clouds.from_config("alpha")


def test_from_config_minimal_cloud(locations):
    locations.write(locations.cwd, ALPHA)
    session = clouds.from_config("alpha")

    identity = session.identity
    assert identity.auth_url == "https://alpha.example.com/v3"
    assert identity.username == "alice"
    assert identity.password == "s3cret"
    assert identity.user_domain == DEFAULT_DOMAIN
    assert identity.scope is None
    assert session.endpoint_filters.region is None
    assert session.endpoint_filters.interfaces is None


def test_from_config_project_defaults_to_default_domain(locations):
    locations.write(locations.cwd, FULL)
    session = clouds.from_config("alpha")
    assert session.identity.scope == ProjectScope(Name("proj1"), Name("Default"))


def test_from_config_uses_explicit_domains_and_region(locations):
    locations.write(locations.cwd, FULL)
    session = clouds.from_config("beta")

    assert session.identity.user_domain == "udomain"
    assert session.identity.scope == ProjectScope(Name("proj2"), Name("pdomain"))
    assert session.endpoint_filters.region == "RegionTwo"


def test_from_config_missing_cloud(locations):
    locations.write(locations.cwd, FULL)
    with pytest.raises(InvalidConfig, match="No such cloud: gamma"):
        clouds.from_config("gamma")


def test_from_config_without_file():
    with pytest.raises(InvalidConfig, match="not found in any location"):
        clouds.from_config("alpha")


def test_from_config_uses_first_file_only(locations):
    locations.write(locations.cwd, ALPHA)
    locations.write(locations.user, FULL)

    # beta only exists in the home file, which is never read.
    with pytest.raises(InvalidConfig):
        clouds.from_config("beta")
    assert clouds.from_config("alpha").identity.auth_url.startswith("https://alpha")


def test_from_config_home_file(locations):
    locations.write(locations.user, FULL)
    assert clouds.from_config("beta").identity.username == "bob"


def test_from_config_is_repeatable(locations):
    locations.write(locations.cwd, FULL)
    before = locations.cwd.read_text(encoding="utf-8")

    first = clouds.from_config("beta")
    second = clouds.from_config("beta")

    assert first == second
    assert first is not second
    assert locations.cwd.read_text(encoding="utf-8") == before


def test_from_config_malformed_url_is_not_wrapped(locations):
    locations.write(
        locations.cwd,
        """
        clouds:
          alpha:
            auth:
              auth_url: keystone.example.com
              username: alice
              password: s3cret
        """,
    )
    with pytest.raises(MissingSchema) as excinfo:
        clouds.from_config("alpha")
    assert not isinstance(excinfo.value, OSAuthError)


def test_session_from_cloud_removes_entry(locations):
    path = locations.write(locations.cwd, FULL)
    document = clouds.load_clouds(path)

    clouds.session_from_cloud(document, "alpha")
    assert "alpha" not in document.clouds
    with pytest.raises(InvalidConfig):
        clouds.session_from_cloud(document, "alpha")
