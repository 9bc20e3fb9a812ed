from polymd.cli import main

main()
