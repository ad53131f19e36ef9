"""
Example: Step-by-step discrete-time convolution

This example parses two signals from text, reveals their convolution one
output sample at a time the way a teaching display would, and finishes
with the convolution-theory report.
"""

import numpy as np

from sigconv import ConvolutionEngine, parse_signal, parse_time_grid


def example_stepping():
    """Example: decaying exponential convolved with a rectangular pulse."""
    print("=" * 60)
    print("Example 1: Stepping through y[n] = x[n] * h[n]")
    print("=" * 60)

    n = parse_time_grid("-2:6")
    x = parse_signal("0.8^n*u[n]", n)
    h = parse_signal("u[n]-u[n-3]", n)

    engine = ConvolutionEngine()
    engine.initialize(x, h)

    while not engine.is_complete():
        step = engine.compute_step()
        overlap = np.count_nonzero(step.product)
        print(
            f"n = {step.n:5g}   y[n] = {step.y_n:8.4f}   "
            f"overlapping samples: {overlap}   ({engine.progress():5.1f}%)"
        )
    print()
    return engine


def example_compliance(engine):
    """Example: theory checks on the finished convolution."""
    print("=" * 60)
    print("Example 2: Convolution theory report")
    print("=" * 60)

    report = engine.verify_compliance()
    for line in report.summary_lines():
        print(line)
    print(f"Comparison with reference: {engine.get_convolution_comparison().status}")
    print()


def example_impulse():
    """Example: the unit impulse is the identity of convolution."""
    print("=" * 60)
    print("Example 3: Impulse response")
    print("=" * 60)

    n = parse_time_grid("0:4")
    h = parse_signal("delta[n-2]", n)

    engine = ConvolutionEngine()
    engine.initialize([1.0], h.samples, n, n)
    out_n, y = engine.get_complete_output()
    print(f"Output positions: {out_n.values}")
    print(f"Output samples:   {y}")
    print(f"Impulse check: {engine.verify_compliance().impulse_response}")
    print()


if __name__ == "__main__":
    engine = example_stepping()
    example_compliance(engine)
    example_impulse()
    print("All examples completed successfully!")
