from tausug_translator.app import main

main()
