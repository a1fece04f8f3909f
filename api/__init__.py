"""
面向聊天室傳輸層的 HTTP 介面

傳輸層把指令與按鈕送到這裡，再把返回的顯示內容套用到聊天室
"""
