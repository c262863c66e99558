import io

import pytest
from rich.console import Console

from reviewreq_core.utils.console import Reporter


@pytest.fixture
def reporter():
    """Reporter writing to an in-memory buffer (reporter.console.file.getvalue())."""
    return Reporter(Console(file=io.StringIO(), width=300, highlight=False))
