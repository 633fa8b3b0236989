"""Root pytest configuration."""

pytest_plugins = ["statsverify.pytest_plugin", "pytester"]
