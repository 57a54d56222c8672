import sys

from scaffold_next_pro.pipeline import main

sys.exit(main())
