from pdfdrop.main import main

main()
