# -*- encoding: utf-8 -*-

EPSILON = 1e-5


def are_close(num1, num2, epsilon=EPSILON):
    """Return True if the two numbers differ by less than `epsilon`"""
    return abs(num1 - num2) < epsilon


def clamp(x, lower=0.0, upper=1.0):
    """Force `x` within the range [`lower`, `upper`]"""
    return min(upper, max(lower, x))
