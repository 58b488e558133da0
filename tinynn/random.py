"""Lehmer (Park-Miller) pseudo-random numbers with uniform and normal draws."""

import math

MODULUS = 2147483647
MULTIPLIER = 48271
DEFAULT_SEED = 96431

_Q = MODULUS // MULTIPLIER
_R = MODULUS % MULTIPLIER
_SEED_MASK = 0x7FFFFFFF


class LehmerRandom:
    """A Lehmer random number generator with a 31-bit state."""

    def __init__(self, seed=DEFAULT_SEED):
        self.state = seed & _SEED_MASK

    def random(self):
        """Advance the state and return a number uniformly distributed in (0, 1]."""
        s = self.state
        t = MULTIPLIER * (s % _Q) - _R * (s // _Q)
        self.state = t if t > 0 else t + MODULUS
        return self.state / MODULUS

    def uniform(self, low, high):
        """Return a number uniformly distributed between low and high."""
        return self.random() * (high - low) + low

    def normal(self, mean, stddev):
        """Return a normally distributed number (Box-Muller transform)."""
        u1 = self.random()
        u2 = self.random()
        z = math.sqrt(-2.0 * math.log(u1)) * math.sin(2.0 * math.pi * u2)
        return mean + stddev * z


_default = LehmerRandom()


def seed(value):
    """Reseed the shared generator; only the low 31 bits of value are used."""
    _default.state = value & _SEED_MASK


def random():
    """Return a number in (0, 1] from the shared generator."""
    return _default.random()


def uniform(low, high):
    """Return a uniformly distributed number from the shared generator."""
    return _default.uniform(low, high)


def normal(mean, stddev):
    """Return a normally distributed number from the shared generator."""
    return _default.normal(mean, stddev)