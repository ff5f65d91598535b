import importlib.util
import os
import unittest
import warnings

import matplotlib

matplotlib.use("Agg")

EXAMPLES_DIR = os.path.join(os.path.dirname(__file__), "..", "examples")


def load_example(name):
    path = os.path.join(EXAMPLES_DIR, name + ".py")
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestExamples(unittest.TestCase):
    def run_example(self, name):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            load_example(name).main()

    def test_01(self):
        self.run_example("dacemp_example01_1d_interpolation")

    def test_02(self):
        self.run_example("dacemp_example02_2d_lhs")

    def test_03(self):
        self.run_example("dacemp_example03_dsmerge")


if __name__ == "__main__":
    unittest.main()
