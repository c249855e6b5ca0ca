from fullsub.cli import main

main()
