"""Allow ``python -m depsweep``."""

from depsweep.cli import main

main(prog_name="depsweep")
