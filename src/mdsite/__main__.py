from mdsite.cli import main

main()
