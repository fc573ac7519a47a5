"""Sample test module for markrunner.

Run with: markrunner run examples/sample_tests.py
"""

import markrunner


class SampleTests:
    """Tests sharing a list fixture that is rebuilt for every test."""

    def __init__(self):
        self.items = None

    @markrunner.setup
    def init_list(self):
        self.items = []
        print(">> Setup: list initialized")

    @markrunner.test
    def Test_Addition_Works(self):
        if 2 + 2 != 4:
            raise Exception("2 + 2 should equal 4")

    @markrunner.test
    def _Test_String_NotEmpty(self):
        s = "hello"
        if not s:
            raise Exception("String should not be empty")

    @markrunner.test
    def Test_Failure_Demo(self):
        raise Exception("Oops")

    @markrunner.teardown
    def cleanup(self):
        self.items.clear()
        print(">> Teardown: list cleared")

    # Not marked, never runs
    def helper_method(self):
        pass


@markrunner.test
def Test_Module_Level_Function() -> None:
    assert sum([1, 2, 3]) == 6
