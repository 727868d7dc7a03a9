from cobragen.main import main

main()
