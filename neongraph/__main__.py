from neongraph.main import main

main()
