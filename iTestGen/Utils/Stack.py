from collections import deque


class Stack:
    def __init__(self):
        self.__stack = deque()

    def push(self, a):
        self.__stack.append(a)

    def pop(self):
        if self.__stack.__len__() == 0:
            raise IndexError("pop from an empty stack")
        return self.__stack.pop()

    def size(self):
        return self.__stack.__len__()

    def clear(self):
        self.__stack.clear()

    def empty(self):
        return self.__stack.__len__() == 0

    def getTop(self):
        if self.__stack.__len__() != 0:
            return self.__stack[-1]
        else:
            return None

    def getStack(self):
        return list(self.__stack)
