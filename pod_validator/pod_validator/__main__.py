"""Module entrypoint for `python -m pod_validator`.

Delegates to the validator CLI implementation.
"""

from .validator.run_validate import main


if __name__ == "__main__":
    main()
