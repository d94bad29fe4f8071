from .mandatory_tags import main

main()
