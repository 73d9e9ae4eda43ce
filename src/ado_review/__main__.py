import sys

from ado_review.main import main

sys.exit(main())
