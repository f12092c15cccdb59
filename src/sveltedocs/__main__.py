from sveltedocs.cli import main

main()
