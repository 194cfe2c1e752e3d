from snackshop.main import main

main()
