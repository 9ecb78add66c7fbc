from reviewbot.main import run

run()
