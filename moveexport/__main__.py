from moveexport.cli import main

main(prog_name="moveexport")
