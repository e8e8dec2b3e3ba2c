"""Module entrypoint for `python -m openapi_linter.linter`.

Delegates to the linter CLI implementation.
"""

from .run_lint import run


if __name__ == "__main__":
    run()
