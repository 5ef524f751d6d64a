import sys

from linkedin_reports.cli import main

sys.exit(main())
