from furever.cli import main

main()
