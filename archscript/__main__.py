import sys

from archscript.repl import main

sys.exit(main())
