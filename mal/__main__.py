from mal.cli import main

main()
