"""Allow ``python -m extpage``."""

from extpage.pipeline import main

main()
