import unittest


class TestImports(unittest.TestCase):
    def test_cqa_module_imports(self) -> None:
        """Verify that all public modules can be imported."""
        modules = [
            "abstract_sdk",
            "abstract_sdk.client",
            "abstract_sdk.errors",
            "abstract_sdk.models",
            "abstract_sdk.projects",
            "abstract_sdk.shares",
            "abstract_sdk.signature",
            "abstract_sdk.webhooks",
            "abstract_sdk._cli",
            "abstract_sdk._http",
        ]
        for module in modules:
            try:
                __import__(module)
            except ImportError as ex:
                raise AssertionError(f"Failed to import {module}: {ex}") from None


if __name__ == "__main__":
    unittest.main(verbosity=2)
