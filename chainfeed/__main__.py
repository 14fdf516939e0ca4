from chainfeed.main import main

main()
