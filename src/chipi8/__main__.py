from chipi8.ui.app import main

main()
