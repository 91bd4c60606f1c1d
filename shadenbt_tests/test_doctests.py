import doctest
import importlib
import pkgutil

import pytest

import shadenbt


def _iter_module_names() -> list[str]:
    return [info.name for info in pkgutil.walk_packages(shadenbt.__path__, prefix='shadenbt.')]


@pytest.mark.parametrize('module_name', _iter_module_names())
def test_doctests(module_name: str) -> None:
    module = importlib.import_module(module_name)
    result = doctest.testmod(module, optionflags=doctest.ELLIPSIS)
    assert result.failed == 0, f'{result.failed} doctest(s) failed in {module_name}'
