from runguard.cli import main

main()
