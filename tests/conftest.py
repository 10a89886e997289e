"""Global test fixtures."""

import os

import logfire

# Keep Config from picking up a developer's YAML file
os.environ.pop("GENETREES_CONFIG_FILE", None)

# Spans are created by the search service; keep them local to the test run
logfire.configure(send_to_logfire=False, console=False)
