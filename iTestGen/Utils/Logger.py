import sys
import time


class Logger:
    def __init__(self):
        pass

    def __stamp(self, level: str):
        return time.strftime('%Y-%m-%d %H:%M:%S - ' + level + ' : ', time.localtime())

    def info(self, strInfo: str):
        print(self.__stamp("INFO") + strInfo)

    def warning(self, strInfo: str):
        print("\033[31m{}\033[0m".format(self.__stamp("WARNING") + strInfo))

    def fail(self, strInfo: str):
        print("\033[31m{}\033[0m".format(self.__stamp("FAILURE") + strInfo))
        sys.exit(-1)

    def processing(self, strInfo: str):
        print(self.__stamp("PROCESS DETAIL") + strInfo)
