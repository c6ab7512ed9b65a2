"""Allow ``python -m rlx ARGS``, equivalent to the ``rlx`` console script."""

from rlx.cli import forward_main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(forward_main())
