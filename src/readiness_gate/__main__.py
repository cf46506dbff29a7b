import sys

from readiness_gate.cli import main

sys.exit(main())
