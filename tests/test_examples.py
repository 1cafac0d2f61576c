import logging
import os
import runpy

EXAMPLES = os.path.join(os.path.dirname(__file__), os.pardir, "examples")


def test_separable_sum_example(caplog):
    with caplog.at_level(logging.INFO):
        runpy.run_path(os.path.join(EXAMPLES, "separable_sum.py"),
                       run_name="__main__")
    assert "Prox optimality tested successfully" in caplog.text
