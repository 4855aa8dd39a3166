from frothy.cli import main

main(prog_name="frothy")
