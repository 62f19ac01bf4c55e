from clawcord.main import main

main()
