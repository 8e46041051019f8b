from warehouse.main import run

run()
