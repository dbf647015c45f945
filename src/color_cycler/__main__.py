from color_cycler.main import run

run()
