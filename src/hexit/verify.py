# Checks run on the length of the output once it has been produced


class VerificationFailed(Exception):
    """Raised with a description of what the length should have been."""


class Verification:
    ANYTHING = 'anything'
    EXACT = 'exact'
    MULTIPLE = 'multiple'

    def __init__(self, kind=ANYTHING, number=None):
        self.kind = kind
        self.number = number

    @classmethod
    def anything_goes(cls):
        return cls()

    @classmethod
    def exact_length(cls, number):
        return cls(cls.EXACT, number)

    @classmethod
    def multiple(cls, number):
        return cls(cls.MULTIPLE, number)

    def verify(self, length):
        if self.kind == self.EXACT and length != self.number:
            raise VerificationFailed(f"{self.number}")
        if self.kind == self.MULTIPLE and length % self.number != 0:
            raise VerificationFailed(f"multiple of {self.number}")

    def __eq__(self, other):
        return isinstance(other, Verification) and (self.kind, self.number) == (other.kind, other.number)

    def __repr__(self):
        return f"Verification({self.kind!r}, {self.number!r})"
