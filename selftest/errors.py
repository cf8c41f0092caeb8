"""
Self-tests for exception assertions.
"""

import stf


class CustomException(RuntimeError):
    pass


class ChecksumError(stf.TaggedError):
    kind = "ChecksumError"
    is_a = ("IntegrityError",)


def throw_custom():
    raise CustomException("")


@stf.test("Exceptions", "ThrowUnnamed")
def throw_unnamed():
    def thrower():
        raise Exception("Unnamed")

    stf.assert_exception(thrower)


@stf.test("Exceptions", "ExpectedException")
def expected_exception():
    stf.assert_exception_type(throw_custom, CustomException)


# Passes because CustomException derives from RuntimeError
@stf.test("Exceptions", "ExpectedAncestor")
def expected_ancestor():
    stf.assert_exception_type(throw_custom, RuntimeError)


@stf.test("Exceptions", "DirectLambda")
def direct_lambda():
    stf.assert_exception(lambda: [][1])
    stf.assert_exception_type(lambda: {}["missing"], KeyError)
    stf.assert_exception_type(lambda: {}["missing"], LookupError)


@stf.test("Exceptions", "Kinds")
def kinds():
    def corrupt():
        raise ChecksumError("bad checksum")

    stf.assert_exception_type(corrupt, "ChecksumError")
    stf.assert_exception_type(corrupt, "IntegrityError")
    stf.assert_exception_type(throw_custom, "RuntimeError")
