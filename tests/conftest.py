"""Shared fixtures: realistic path listings from a home directory."""

import pytest

HOME_PATHS = [
    "Projects/neovim/",
    "Projects/neo-api-rs/",
    "Projects/neo-api-rs/database.rs",
    "Projects/config/nvim",
    "Projects/nvim-traveller-rs",
    "Android/Sdk/platform-tools/fastboot",
    "bin/google-cloud-sdk/lib/surface/monitoring/snoozes/",
    "services/update.yaml",
    "gateways/delete.yaml",
    ".bashrc",
    "notes.md",
]


@pytest.fixture
def home_paths():
    return list(HOME_PATHS)
