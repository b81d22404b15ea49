import sys

from sql2excel.main import main

sys.exit(main())
