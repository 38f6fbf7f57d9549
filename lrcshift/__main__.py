from lrcshift.cli import main

main()
