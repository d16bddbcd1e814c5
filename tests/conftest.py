#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from bnumber import BNumber, SuffixTable


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(scope="session")
def table() -> SuffixTable:
    """A freshly built default suffix table."""
    return SuffixTable()


@pytest.fixture
def k100() -> BNumber:
    return BNumber.parse("100K")


@pytest.fixture
def k200() -> BNumber:
    return BNumber.parse("200K")


@pytest.fixture
def zero() -> BNumber:
    return BNumber.from_value(0)
