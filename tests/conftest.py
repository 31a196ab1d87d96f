"""Shared fixtures for casbin-cli tests."""

from pathlib import Path

import pytest

from casbin_cli.config import get_settings

POM_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>org.casbin</groupId>
  <artifactId>casbin-java-cli</artifactId>
  <version>0.0.1</version>
  <dependencies>
{records}
  </dependencies>
</project>
"""

BASIC_MODEL = """[request_definition]
r = sub, obj, act

[policy_definition]
p = sub, obj, act

[policy_effect]
e = some(where (p.eft == allow))

[matchers]
m = r.sub == p.sub && r.obj == p.obj && r.act == p.act
"""

BASIC_POLICY = """p, alice, data1, read
p, bob, data2, write
"""


def dependency(group_id: str, artifact_id: str, version: str) -> str:
    """Render one <dependency> record."""
    return (
        "    <dependency>\n"
        f"      <groupId>{group_id}</groupId>\n"
        f"      <artifactId>{artifact_id}</artifactId>\n"
        f"      <version>{version}</version>\n"
        "    </dependency>"
    )


@pytest.fixture
def write_pom(tmp_path):
    """Write a pom.xml with the given dependency records and return its path."""

    def _write(*records: str, name: str = "pom.xml") -> Path:
        path = tmp_path / name
        path.write_text(POM_TEMPLATE.format(records="\n".join(records)), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def basic_acl(tmp_path):
    """Write a basic ACL model and policy, returning (model_path, policy_path)."""
    model_path = tmp_path / "basic_model.conf"
    policy_path = tmp_path / "basic_policy.csv"
    model_path.write_text(BASIC_MODEL, encoding="utf-8")
    policy_path.write_text(BASIC_POLICY, encoding="utf-8")
    return model_path, policy_path


@pytest.fixture
def record():
    """Return the <dependency> renderer."""
    return dependency


@pytest.fixture
def fresh_settings():
    """Drop cached settings so environment changes made by a test take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
