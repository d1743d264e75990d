from extstate.cli import main

main()
