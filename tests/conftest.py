"""Shared fixtures."""

from pathlib import Path

import pytest

from precession.spec import PaneSpec, SessionSpec, WindowSpec


WEB_PROJECT_YAML = """\
name: My web project
root: /home/user/web
windows:
  - name: Code
    cmd: vim .
  - name: Dev servers
    layout: even-horizontal
    panes:
      - docker-compose up
      - cd server && cargo run
      - cd client && yarn start
  - name: Tests
    layout: even-horizontal
    panes:
      - cd server && cargo watch -x test
      - cd client && yarn test
      -
"""


@pytest.fixture
def web_project() -> SessionSpec:
    """The "My web project" definition as a raw spec."""
    return SessionSpec(
        name="My web project",
        root=Path("/home/user/web"),
        windows=(
            WindowSpec(name="Code", cmd="vim ."),
            WindowSpec(
                name="Dev servers",
                layout="even-horizontal",
                panes=(
                    PaneSpec("docker-compose up"),
                    PaneSpec("cd server && cargo run"),
                    PaneSpec("cd client && yarn start"),
                ),
            ),
            WindowSpec(
                name="Tests",
                layout="even-horizontal",
                panes=(
                    PaneSpec("cd server && cargo watch -x test"),
                    PaneSpec("cd client && yarn test"),
                    PaneSpec(),
                ),
            ),
        ),
    )


@pytest.fixture
def web_project_yaml() -> str:
    return WEB_PROJECT_YAML
