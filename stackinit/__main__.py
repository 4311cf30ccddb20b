from stackinit.cli import main

main()
