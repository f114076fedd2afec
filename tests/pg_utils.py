import os
import shutil
import subprocess
from contextlib import contextmanager

import pytest


def docker_available() -> bool:
    if not shutil.which("docker"):
        return False
    try:
        proc = subprocess.run(["docker", "info"], capture_output=True, text=True, timeout=5)
    except (OSError, subprocess.SubprocessError):
        return False
    return proc.returncode == 0


@contextmanager
def postgres_container(image: str = None):
    """Spin up a throwaway Postgres via testcontainers and yield its psycopg2 URL."""
    if os.getenv("SKIP_DOCKER_TESTS") == "1":
        pytest.skip("SKIP_DOCKER_TESTS=1")
    if not docker_available():
        pytest.skip("Docker daemon is not available; skipping tests that require containers")

    from testcontainers.postgres import PostgresContainer

    image = image or os.getenv("TEST_POSTGRES_IMAGE", "postgres:16-alpine")
    with PostgresContainer(image, driver="psycopg2") as pg:
        yield pg.get_connection_url()
