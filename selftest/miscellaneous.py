"""
Self-tests for exclusions and timeouts.
"""

import stf


@stf.test("Miscellaneous", "TestToRun")
def to_run():
    stf.assert_true(True)


@stf.test("Miscellaneous", "TestToExclude")
def to_exclude():
    # Excluded below, so this deliberate failure never runs
    stf.assert_true(False)


@stf.test("Miscellaneous", "AnotherTestToRun", timeout=5)
def another_test_to_run():
    stf.assert_true(True)


@stf.test("Miscellaneous", "SecondTestToExclude")
def second_test_to_exclude():
    stf.assert_true(False)


stf.exclude("Miscellaneous", "TestToExclude")
stf.exclude("Miscellaneous", "SecondTestToExclude")
