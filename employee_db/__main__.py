import sys

from employee_db.cli import main

sys.exit(main())
