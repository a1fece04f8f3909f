"""
核心業務邏輯層

這個 package 包含所有會碰到儲存或生命週期狀態的邏輯，包括：
- Identity：參與者身分解析（insert-or-update + 查詢）
- Stores：Session、Estimation、Chat config 的存取
- Engine：OPEN -> FINISHED -> 重新開始 的狀態轉換與投票
- Policy：誰的操作可以更新畫面
- Upsert：依資料庫方言的原子性 insert-or-update
"""
