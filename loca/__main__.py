from loca.app import main

main()
